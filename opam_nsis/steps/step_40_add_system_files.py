from __future__ import annotations

import logging
from typing import Any, Dict

from ..augment import add_files_using_system_package
from ..pipeline import RunCtx

logger = logging.getLogger(__name__)


class AddSystemFilesStep:
    step_id = "40_add_system_files"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        added = state.setdefault("augment", {}).setdefault("system_packages", {})
        for aug in ctx.cfg.system_package_augments:
            added[aug.package] = add_files_using_system_package(
                ctx.artifacts, aug, use_cygpath=ctx.cfg.use_cygpath
            )
        return state
