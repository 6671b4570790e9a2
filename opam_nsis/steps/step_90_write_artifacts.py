from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import RunCtx

logger = logging.getLogger(__name__)


class WriteArtifactsStep:
    step_id = "90_write_artifacts"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        written = ctx.artifacts.write(ctx.output_dir, dry_run=ctx.dry_run)
        state["artifacts"] = sorted(p.name for p in written)
        return state
