from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from .errors import InventoryIntegrityError
from .filters import FilterRule
from .lib import nsis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    source: str
    relpath: str

    @property
    def out_dir(self) -> str:
        return posixpath.dirname(self.relpath)

    @classmethod
    def from_source(cls, source: str, root: str) -> "FileEntry":
        """Strip the installation root from an absolute source path."""
        root = root.rstrip("/")
        if source.startswith(root + "/"):
            rel = source[len(root) + 1 :]
        else:
            logger.warning("File %s is outside of %s; keeping its full path", source, root)
            rel = source.lstrip("/")
        return cls(source=source, relpath=rel)


@dataclass(frozen=True)
class SetOutPath:
    directory: str

    def render(self) -> str:
        return nsis.set_out_path(self.directory)


@dataclass(frozen=True)
class CopyFile:
    source: str

    def render(self) -> str:
        return nsis.file_line(self.source)


Directive = Union[SetOutPath, CopyFile]


@dataclass
class Manifest:
    """Ordered copy directives for one package.

    Consecutive files with the same output directory share one SetOutPath.
    The current directory survives across appends, so files added later by
    other stages coalesce with what is already there.
    """

    package: str
    header: str = ""
    directives: List[Directive] = field(default_factory=list)
    _current_dir: Optional[str] = field(default=None, init=False, repr=False)

    @property
    def filename(self) -> str:
        return nsis.manifest_filename(self.package)

    @property
    def files(self) -> List[str]:
        return [d.source for d in self.directives if isinstance(d, CopyFile)]

    def add_file(self, source: str, out_dir: str) -> None:
        if out_dir != self._current_dir:
            self.directives.append(SetOutPath(out_dir))
            self._current_dir = out_dir
        self.directives.append(CopyFile(source))

    def add_entry(self, entry: FileEntry) -> None:
        self.add_file(entry.source, entry.out_dir)

    def extend(self, entries: Iterable[FileEntry]) -> None:
        for entry in entries:
            self.add_entry(entry)

    def render(self) -> str:
        lines = [self.header] if self.header else []
        lines.extend(d.render() for d in self.directives)
        return "\n".join(lines) + "\n"


def build_manifest(package: str, files: Sequence[str], rule: FilterRule, root: str) -> Manifest:
    """Filter a package's declared files and turn them into copy directives.

    Directories in the inventory are skipped. A declared path that is neither
    a file nor a directory means the package metadata does not match the disk.
    """

    manifest = Manifest(package=package, header=f"# File list for {package} {rule.describe()}")
    for path in rule.apply(files):
        if os.path.isdir(path):
            continue
        if not os.path.isfile(path):
            raise InventoryIntegrityError(package, path)
        manifest.add_entry(FileEntry.from_source(path, root))

    logger.debug("Manifest for %s: %d of %d files", package, len(manifest.files), len(files))
    return manifest
