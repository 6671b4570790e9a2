from __future__ import annotations

from typing import Iterable


class OpamNsisError(RuntimeError):
    """Base class for every fatal manifest-generation error."""


class ConfigurationError(OpamNsisError, ValueError):
    pass


class SelectionMismatchError(ConfigurationError):
    """The allow-list and deny-list package filters disagree."""

    def __init__(self, allowed: Iterable[str], kept: Iterable[str]) -> None:
        self.allowed = frozenset(allowed)
        self.kept = frozenset(kept)
        only_allowed = sorted(self.allowed - self.kept)
        only_kept = sorted(self.kept - self.allowed)
        super().__init__(
            "The allow-list and deny-list selections of opam packages differ. "
            "Please adjust the package filters!\n"
            f"Allow-list selection = {sorted(self.allowed)}\n"
            f"Deny-list selection = {sorted(self.kept)}\n"
            f"Only in allow-list selection: {only_allowed}\n"
            f"Only in deny-list selection: {only_kept}"
        )


class InventoryIntegrityError(OpamNsisError):
    def __init__(self, package: str, path: str) -> None:
        self.package = package
        self.path = path
        super().__init__(f"In package '{package}' the file '{path}' does not exist")


class RegistryError(OpamNsisError):
    pass


class AugmentError(OpamNsisError):
    """A post-crawl tool (which, ldd, cygcheck, cygpath) failed."""
