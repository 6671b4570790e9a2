from __future__ import annotations

from pathlib import Path

import pytest

from opam_nsis.emitter import ArtifactSet
from tests._fixtures.registry import SwitchBuilder


@pytest.fixture
def switch(tmp_path: Path) -> SwitchBuilder:
    """Provide a fake opam switch rooted at the pytest tmp_path."""
    return SwitchBuilder(tmp_path)


@pytest.fixture
def artifacts() -> ArtifactSet:
    return ArtifactSet()
