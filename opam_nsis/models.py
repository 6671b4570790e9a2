from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .manifest import Manifest


class Visibility(str, enum.Enum):
    # user selectable section
    VISIBLE = "visible"
    # selected automatically by dependency
    HIDDEN = "hidden"


@dataclass
class Package:
    name: str
    visibility: Visibility
    depth: int = 0
    manifest: Optional[Manifest] = None
    dependencies: List[str] = field(default_factory=list)

    @property
    def visible(self) -> bool:
        return self.visibility is Visibility.VISIBLE

    def attach_manifest(self, manifest: Manifest) -> None:
        if self.manifest is not None:
            raise RuntimeError(f"Manifest for {self.name} already attached")
        self.manifest = manifest


@dataclass(frozen=True)
class DependencyEdge:
    dependent: str
    dependency: str
    visibility: Visibility
