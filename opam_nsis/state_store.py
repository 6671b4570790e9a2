from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def save_state(path: str, state: Dict[str, Any]) -> None:
    """Write the run record (selection, discovered packages, errors)."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Run state saved to %s", p)


def new_state(*, config_path: str | None, output_dir: str, dry_run: bool) -> Dict[str, Any]:
    return {
        "version": 1,
        "config": {"path": config_path, "output_dir": output_dir, "dry_run": dry_run},
        "selection": [],
        "packages": {},
        "augment": {},
        "execution": {"current_step": None, "ran_steps": [], "errors": []},
    }


def record_packages(state: Dict[str, Any], packages: Dict[str, Any]) -> None:
    state["packages"] = {
        name: {
            "visibility": pkg.visibility.value,
            "depth": pkg.depth,
            "files": len(pkg.manifest.files) if pkg.manifest is not None else 0,
            "dependencies": list(pkg.dependencies),
        }
        for name, pkg in packages.items()
    }
