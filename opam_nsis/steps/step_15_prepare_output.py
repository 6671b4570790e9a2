from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from ..pipeline import RunCtx

logger = logging.getLogger(__name__)


class PrepareOutputStep:
    step_id = "15_prepare_output"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        out = Path(ctx.output_dir)
        if ctx.dry_run:
            logger.info("Would recreate output directory %s", out)
            return state

        # Artifacts of an earlier run must never mix with this one.
        if out.exists():
            shutil.rmtree(out)
        out.mkdir(parents=True)
        logger.info("Output directory %s ready", out)
        return state
