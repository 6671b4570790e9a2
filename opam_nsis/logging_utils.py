from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_PATH = "logs/opam-nsis.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


def _open_log_file(log_path: str) -> tuple[logging.Handler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        # read-only checkout or sandbox
        fallback = str(Path.cwd() / "opam-nsis.log")
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure root logging for a manifest generation run.

    The log file always records DEBUG, which includes the stdout/stderr of
    every opam and Cygwin query, so a run aborted by an integrity or registry
    error can be traced to the package and command that caused it. `level`
    only applies to the console ("Analyzing package ..." progress at INFO).

    Calling this again only adjusts the console level; handlers are added once.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if getattr(root, "_opam_nsis_configured", False):
        console = getattr(root, "_opam_nsis_console", None)
        if console is not None:
            console.setLevel(level)
        return getattr(root, "_opam_nsis_log_path", log_path)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(_FORMAT)
    root.addHandler(file_handler)

    console = None
    if also_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(_FORMAT)
        root.addHandler(console)

    setattr(root, "_opam_nsis_configured", True)
    setattr(root, "_opam_nsis_console", console)
    setattr(root, "_opam_nsis_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
