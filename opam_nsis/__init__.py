"""opam -> NSIS installer manifest generator.

Core design goals:
- Every installed package reachable from the selection is analyzed exactly once
- Visible (user selectable) vs. hidden (pulled in by dependency) sections
- Per-package include/exclude file filters with defaults
- Fail fast: any inconsistency aborts the whole run
- Centralized logging
"""

__all__ = []
