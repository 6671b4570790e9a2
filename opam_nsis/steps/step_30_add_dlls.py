from __future__ import annotations

import logging
from typing import Any, Dict

from ..augment import add_dlls_using_ldd
from ..pipeline import RunCtx

logger = logging.getLogger(__name__)


class AddDllsStep:
    step_id = "30_add_dlls"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        added = state.setdefault("augment", {}).setdefault("dlls", {})
        for aug in ctx.cfg.dll_augments:
            added[aug.executable] = add_dlls_using_ldd(ctx.artifacts, aug, use_cygpath=ctx.cfg.use_cygpath)
        return state
