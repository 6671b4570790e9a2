from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from ..errors import RegistryError
from .command import CmdResult, CommandError, run_cmd

logger = logging.getLogger(__name__)


class Registry(Protocol):
    """Read-only view of the installed package set."""

    def prefix(self) -> str:
        ...

    def installed_roots(self) -> List[str]:
        ...

    def files(self, package: str) -> List[str]:
        ...

    def synopsis(self, package: str) -> str:
        ...

    def required_by(self, package: str) -> List[str]:
        ...


def _query(argv: Sequence[str]) -> CmdResult:
    try:
        return run_cmd(argv)
    except CommandError as e:
        raise RegistryError(f"opam query failed: {e}") from e


class OpamRegistry:
    """Registry backed by the opam command line of the active switch."""

    def __init__(self, *, opam: str = "opam", prefix: Optional[str] = None) -> None:
        self._opam = opam
        self._prefix = prefix

    def prefix(self) -> str:
        # The switch prefix is stripped from absolute paths to create relative paths.
        if self._prefix is None:
            out = _query([self._opam, "conf", "var", "prefix"]).stdout.strip()
            if not out.startswith("/"):
                raise RegistryError(f"opam reported an unusable switch prefix: {out!r}")
            self._prefix = out
        return self._prefix

    def installed_roots(self) -> List[str]:
        return _query([self._opam, "list", "--installed-roots", "--short", "--columns=name"]).lines()

    def files(self, package: str) -> List[str]:
        return _query([self._opam, "show", "--list-files", package]).lines()

    def synopsis(self, package: str) -> str:
        out = _query([self._opam, "show", "--field=synopsis", package]).stdout.strip()
        if len(out) >= 2 and out[0] == out[-1] == '"':
            out = out[1:-1]
        return " ".join(out.split())

    def required_by(self, package: str) -> List[str]:
        # --installed is required because of an opam bug, see
        # https://github.com/ocaml/opam/issues/4461
        return _query([self._opam, "list", f"--required-by={package}", "--short", "--installed"]).lines()
