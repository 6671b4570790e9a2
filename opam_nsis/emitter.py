from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .lib import nsis
from .manifest import Manifest
from .models import DependencyEdge, Package, Visibility

logger = logging.getLogger(__name__)

SECTIONS_VISIBLE = "sections_visible.nsh"
SECTIONS_HIDDEN = "sections_hidden.nsh"
# Consumed by the installer logic generator, which turns each line into a
# "selecting this forces selecting that" rule.
DEPENDENCIES_VISIBLE = "dependencies_visible.nsh.in"
DEPENDENCIES_HIDDEN = "dependencies_hidden.nsh.in"
STRINGS = "strings.nsh"
SECTION_DESCRIPTIONS = "section_descriptions.nsh"

STREAMS = (
    SECTIONS_VISIBLE,
    SECTIONS_HIDDEN,
    DEPENDENCIES_VISIBLE,
    DEPENDENCIES_HIDDEN,
    STRINGS,
    SECTION_DESCRIPTIONS,
)


class ArtifactSet:
    """In-memory installer artifacts of one run: line streams plus per-package manifests."""

    def __init__(self) -> None:
        self.streams: Dict[str, List[str]] = {name: [] for name in STREAMS}
        self.manifests: Dict[str, Manifest] = {}
        self.edges: List[DependencyEdge] = []

    def add_manifest(self, manifest: Manifest) -> None:
        if manifest.package in self.manifests:
            raise RuntimeError(f"Manifest for {manifest.package} emitted twice")
        self.manifests[manifest.package] = manifest

    def manifest(self, package: str) -> Optional[Manifest]:
        return self.manifests.get(package)

    def emit_section(self, package: Package, description: Optional[str] = None) -> None:
        if package.visible:
            self.streams[SECTIONS_VISIBLE].extend(nsis.section_lines(package.name, visible=True))
            self.streams[STRINGS].append(nsis.description_string(package.name, description or ""))
            self.streams[SECTION_DESCRIPTIONS].append(nsis.description_binding(package.name))
        else:
            self.streams[SECTIONS_HIDDEN].extend(nsis.section_lines(package.name, visible=False))

    def emit_edge(self, edge: DependencyEdge) -> None:
        stream = DEPENDENCIES_VISIBLE if edge.visibility is Visibility.VISIBLE else DEPENDENCIES_HIDDEN
        self.streams[stream].append(nsis.edge_line(edge.dependent, edge.dependency))
        self.edges.append(edge)

    def write(self, output_dir: str, *, dry_run: bool = False) -> List[Path]:
        """Write every stream (empty ones too) and every manifest."""

        out = Path(output_dir)
        contents: Dict[str, str] = {
            name: "".join(line + "\n" for line in lines) for name, lines in self.streams.items()
        }
        for m in self.manifests.values():
            contents[m.filename] = m.render()

        written: List[Path] = []
        for name, text in contents.items():
            p = out / name
            if dry_run:
                logger.info("Would write %s (%d lines)", p, text.count("\n"))
                continue
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
            written.append(p)

        logger.info("Wrote %d artifacts to %s", len(written), out)
        return written
