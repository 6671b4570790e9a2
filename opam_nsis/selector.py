from __future__ import annotations

import logging
from typing import Sequence, Tuple

from .errors import ConfigurationError, SelectionMismatchError
from .filters import compile_pattern

logger = logging.getLogger(__name__)


def select_packages(installed: Sequence[str], allow: str, deny: str) -> Tuple[str, ...]:
    """Compute the top-level package selection.

    Both an allow-list and a deny-list filter make sense, so we apply both and
    require an identical result. A new package in the switch then has to be
    classified explicitly instead of silently landing in (or missing from)
    the installer.
    """

    allow_re = compile_pattern(allow, what="selection.allow")
    deny_re = compile_pattern(deny, what="selection.deny")

    allowed = [name for name in installed if allow_re.search(name)]
    kept = [name for name in installed if not deny_re.search(name)]

    if set(allowed) != set(kept):
        raise SelectionMismatchError(allowed, kept)
    if not allowed:
        raise ConfigurationError("Package filters selected no packages")

    selection = tuple(dict.fromkeys(allowed))
    logger.info("Selected %d top-level packages: %s", len(selection), " ".join(selection))
    return selection
