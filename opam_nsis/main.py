from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .build_config import BuildConfig, load_build_config
from .errors import OpamNsisError
from .lib.opam import OpamRegistry, Registry
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import RunCtx, run_pipeline
from .state_store import new_state, save_state
from .steps import (
    AddDllsStep,
    AddSystemFilesStep,
    CrawlPackagesStep,
    PrepareOutputStep,
    SelectPackagesStep,
    WriteArtifactsStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = "build/opam-nsis-state.json"


def build_steps():
    return [
        SelectPackagesStep(),
        PrepareOutputStep(),
        CrawlPackagesStep(),
        AddDllsStep(),
        AddSystemFilesStep(),
        WriteArtifactsStep(),
    ]


def run(
    *,
    cfg: BuildConfig,
    registry: Optional[Registry] = None,
    config_path: Optional[str] = None,
    state_path: str = DEFAULT_STATE_PATH,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Generate the installer artifacts for the current package set.

    Any error aborts the run; artifacts already in the output directory are
    then incomplete and must not be packaged.
    """

    if registry is None:
        registry = OpamRegistry(prefix=cfg.registry_prefix)

    ctx = RunCtx(cfg=cfg, registry=registry, dry_run=dry_run)
    state = new_state(config_path=config_path, output_dir=cfg.output_dir, dry_run=dry_run)

    try:
        result = run_pipeline(ctx=ctx, state=state, steps=build_steps(), stop_after=stop_after)
        state = result.state
        state["execution"]["ran_steps"] = result.ran_steps
        return state
    except Exception as e:
        logger.exception("Manifest generation failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        save_state(state_path, state)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="opam-nsis",
        description="Create NSIS installer include files from the installed opam packages",
    )
    p.add_argument("--config", default=None, help="YAML config merged over the built-in defaults")
    p.add_argument("--output-dir", default=None, help="Directory for the generated .nsh files")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to the run record (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 20_crawl_packages)")
    p.add_argument("--dry-run", action="store_true", help="Query everything, write no artifacts")
    p.add_argument("-v", "--verbose", action="store_true", help="Show command output on the console")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = load_build_config(args.config)
        if args.output_dir:
            cfg = cfg.with_overrides({"paths": {"output_dir": args.output_dir}})
        run(
            cfg=cfg,
            config_path=args.config,
            state_path=args.state,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
        )
    except OpamNsisError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
