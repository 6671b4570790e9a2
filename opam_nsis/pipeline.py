from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .build_config import BuildConfig
from .emitter import ArtifactSet
from .errors import ConfigurationError
from .lib.opam import Registry
from .models import Package

logger = logging.getLogger(__name__)


@dataclass
class RunCtx:
    cfg: BuildConfig
    registry: Registry
    dry_run: bool = False
    artifacts: ArtifactSet = field(default_factory=ArtifactSet)
    selection: Tuple[str, ...] = ()
    packages: Dict[str, Package] = field(default_factory=dict)

    @property
    def output_dir(self) -> str:
        return self.cfg.output_dir


class Step(Protocol):
    """A single stage of a manifest generation run."""

    step_id: str

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: RunCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order. Any exception aborts the run; there is no resume."""

    if stop_after is not None and stop_after not in {s.step_id for s in steps}:
        raise ConfigurationError(f"Unknown step id: {stop_after}")

    ran: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        state = step.run(ctx, state)
        ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
