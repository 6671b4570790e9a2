from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .errors import ConfigurationError

# everything
DEFAULT_INCLUDE = "."
# byte code and library stuff
DEFAULT_EXCLUDE = r"(\.byte\.exe|\.cm[aiox]|\.cmxa|\.o)$"


def compile_pattern(pattern: str, *, what: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid regular expression for {what}: {pattern!r} ({e})") from e


@dataclass(frozen=True)
class FilterRule:
    include: "re.Pattern[str]"
    exclude: "re.Pattern[str]"

    @classmethod
    def from_patterns(cls, include: str, exclude: str, *, what: str = "file filter") -> "FilterRule":
        return cls(
            include=compile_pattern(include, what=f"{what} include"),
            exclude=compile_pattern(exclude, what=f"{what} exclude"),
        )

    def apply(self, paths: Iterable[str]) -> list[str]:
        """Keep include matches, then drop exclude matches. Order is preserved."""
        return [p for p in paths if self.include.search(p) and not self.exclude.search(p)]

    def describe(self) -> str:
        return f"matching {self.include.pattern} excluding {self.exclude.pattern}"


class FilterRules:
    """Read-only package name -> FilterRule table with an explicit default."""

    def __init__(self, default: FilterRule, rules: Optional[Mapping[str, FilterRule]] = None) -> None:
        self._default = default
        self._rules = dict(rules or {})

    @property
    def default(self) -> FilterRule:
        return self._default

    def __contains__(self, package: str) -> bool:
        return package in self._rules

    def for_package(self, package: str) -> FilterRule:
        return self._rules.get(package, self._default)

    @classmethod
    def from_config(
        cls,
        rules: Mapping[str, Mapping[str, str]],
        *,
        default_include: str = DEFAULT_INCLUDE,
        default_exclude: str = DEFAULT_EXCLUDE,
    ) -> "FilterRules":
        """Build the table; a rule that sets only one side inherits the other from the default."""

        default = FilterRule.from_patterns(default_include, default_exclude, what="default file filter")
        compiled = {
            name: FilterRule.from_patterns(
                rule.get("include", default_include),
                rule.get("exclude", default_exclude),
                what=f"file filter of {name}",
            )
            for name, rule in rules.items()
        }
        return cls(default, compiled)
