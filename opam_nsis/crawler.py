from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from .emitter import ArtifactSet
from .filters import FilterRules
from .lib.opam import Registry
from .manifest import build_manifest
from .models import DependencyEdge, Package, Visibility

logger = logging.getLogger(__name__)


class Crawler:
    """Depth-first walk over the dependency closure of the top-level selection.

    Each package is analyzed once: its file inventory is filtered into a
    manifest and its section stub is emitted. Every (dependent, dependency)
    pair reported by the registry becomes an edge, whether or not the
    dependency was already discovered through another path.
    """

    def __init__(self, registry: Registry, rules: FilterRules, artifacts: ArtifactSet, *, root: str) -> None:
        self.registry = registry
        self.rules = rules
        self.artifacts = artifacts
        self.root = root
        self.packages: Dict[str, Package] = {}
        self._top_level: Set[str] = set()
        self._seen: Set[str] = set()

    def visibility_of(self, name: str) -> Visibility:
        return Visibility.VISIBLE if name in self._top_level else Visibility.HIDDEN

    def crawl(self, top_level: Iterable[str]) -> Dict[str, Package]:
        selection = list(dict.fromkeys(top_level))
        self._top_level = set(selection)
        # Top-level packages are known from the start; they are analyzed by
        # this loop, never as somebody's dependency.
        self._seen.update(selection)

        for name in selection:
            if name not in self.packages:
                self._analyze(name, 0)

        logger.info(
            "Discovered %d packages (%d visible, %d hidden), %d dependency edges",
            len(self.packages),
            sum(1 for p in self.packages.values() if p.visible),
            sum(1 for p in self.packages.values() if not p.visible),
            len(self.artifacts.edges),
        )
        return self.packages

    def _analyze(self, name: str, depth: int) -> None:
        logger.info("Analyzing package %s (%d)", name, depth)

        pkg = Package(name=name, visibility=self.visibility_of(name), depth=depth)
        self.packages[name] = pkg

        manifest = build_manifest(name, self.registry.files(name), self.rules.for_package(name), self.root)
        pkg.attach_manifest(manifest)
        self.artifacts.add_manifest(manifest)

        description = self.registry.synopsis(name) if pkg.visible else None
        self.artifacts.emit_section(pkg, description)

        for dependency in self._dependencies(name):
            pkg.dependencies.append(dependency)
            self.artifacts.emit_edge(DependencyEdge(name, dependency, self.visibility_of(dependency)))
            if dependency not in self._seen:
                self._seen.add(dependency)
                self._analyze(dependency, depth + 1)

    def _dependencies(self, name: str) -> List[str]:
        reported = self.registry.required_by(name)
        unique = list(dict.fromkeys(reported))
        if len(unique) != len(reported):
            logger.warning("Registry reported duplicate dependencies for %s: %s", name, " ".join(reported))
        return unique
