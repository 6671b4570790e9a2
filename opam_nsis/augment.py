"""Post-crawl additions to manifests the crawler already built.

These steps only append. They go through Manifest.add_file, so an appended
file lands under the last SetOutPath when its directory is unchanged.
"""

from __future__ import annotations

import logging

from .build_config import DllAugment, SystemPackageAugment
from .emitter import ArtifactSet
from .filters import compile_pattern
from .lib.cygwin import ldd_libraries, package_files, to_windows, which
from .manifest import FileEntry

logger = logging.getLogger(__name__)

DLL_OUT_DIR = "bin"


def add_dlls_using_ldd(artifacts: ArtifactSet, aug: DllAugment, *, use_cygpath: bool = True) -> int:
    """Append the shared libraries an executable links against, filtered by path."""

    manifest = artifacts.manifest(aug.package)
    if manifest is None:
        logger.info("Skipping DLLs for %s: no manifest for package %s", aug.executable, aug.package)
        return 0

    logger.info("Adding DLLs for %s", aug.executable)
    pattern = compile_pattern(aug.filter, what=f"DLL filter of {aug.executable}")
    libs = sorted({lib for lib in ldd_libraries(which(aug.executable)) if pattern.search(lib)})
    for lib in libs:
        manifest.add_file(to_windows(lib, use_cygpath=use_cygpath), DLL_OUT_DIR)
    return len(libs)


def add_files_using_system_package(
    artifacts: ArtifactSet,
    aug: SystemPackageAugment,
    *,
    use_cygpath: bool = True,
) -> int:
    """Append a filtered subset of a system (Cygwin) package's files."""

    manifest = artifacts.manifest(aug.manifest)
    if manifest is None:
        logger.info("Skipping files from %s: no manifest for package %s", aug.package, aug.manifest)
        return 0

    logger.info("Adding files from cygwin package %s", aug.package)
    pattern = compile_pattern(aug.filter, what=f"file filter of {aug.package}")
    files = sorted({f for f in package_files(aug.package) if pattern.search(f)})
    for path in files:
        entry = FileEntry.from_source(path, aug.root)
        manifest.add_file(to_windows(path, use_cygpath=use_cygpath), entry.out_dir)
    return len(files)
