from __future__ import annotations

import logging
from typing import List, Sequence

from ..errors import AugmentError
from .command import CmdResult, CommandError, run_cmd
from .nsis import windows_path

logger = logging.getLogger(__name__)


def _tool(argv: Sequence[str]) -> CmdResult:
    try:
        return run_cmd(argv)
    except CommandError as e:
        raise AugmentError(f"{argv[0]} failed: {e}") from e


def which(executable: str) -> str:
    out = _tool(["which", executable]).stdout.strip()
    if not out:
        raise AugmentError(f"Executable not found on PATH: {executable}")
    return out.splitlines()[0]


def ldd_libraries(path: str) -> List[str]:
    """Resolved library paths from `ldd` (third column of `name => path (addr)`)."""

    libs: List[str] = []
    for ln in _tool(["ldd", path]).lines():
        cols = ln.split(" ")
        if len(cols) >= 3 and cols[1] == "=>":
            libs.append(cols[2])
    return libs


def package_files(package: str) -> List[str]:
    """Files of an installed Cygwin package (`cygcheck -l`)."""
    return _tool(["cygcheck", "-l", package]).lines()


def cygpath_windows(path: str, *, absolute: bool = True) -> str:
    argv = ["cygpath", "-aw", path] if absolute else ["cygpath", "-w", path]
    out = _tool(argv).stdout.strip()
    if not out:
        raise AugmentError(f"cygpath returned nothing for {path}")
    return out


def to_windows(path: str, *, use_cygpath: bool, absolute: bool = True) -> str:
    if use_cygpath:
        return cygpath_windows(path, absolute=absolute)
    return windows_path(path)
