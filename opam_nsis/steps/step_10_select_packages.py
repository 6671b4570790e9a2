from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import RunCtx
from ..selector import select_packages

logger = logging.getLogger(__name__)


class SelectPackagesStep:
    step_id = "10_select_packages"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Create package list")
        ctx.selection = select_packages(
            ctx.registry.installed_roots(),
            ctx.cfg.selection_allow,
            ctx.cfg.selection_deny,
        )
        state["selection"] = list(ctx.selection)
        return state
