"""Tests for opam_nsis.manifest."""

from __future__ import annotations

import pytest

from opam_nsis.errors import InventoryIntegrityError
from opam_nsis.filters import DEFAULT_EXCLUDE, FilterRule
from opam_nsis.manifest import CopyFile, FileEntry, Manifest, SetOutPath, build_manifest
from tests._fixtures.registry import SwitchBuilder


def _rule(include: str = ".", exclude: str = DEFAULT_EXCLUDE) -> FilterRule:
    return FilterRule.from_patterns(include, exclude)


def test_excluded_file_is_dropped_without_extra_directory(switch: SwitchBuilder) -> None:
    files = switch.touch("bin/p.exe", "bin/q.dll", "lib/p.cma")

    manifest = build_manifest("P", files, _rule(exclude=r"\.cma$"), str(switch.root))

    assert manifest.directives == [
        SetOutPath("bin"),
        CopyFile(files[0]),
        CopyFile(files[1]),
    ]


def test_directory_runs_are_coalesced_in_original_order(switch: SwitchBuilder) -> None:
    files = switch.touch(
        "bin/a.exe",
        "bin/b.exe",
        "lib/coq/x.vo",
        "bin/c.exe",
        "lib/coq/y.vo",
        "lib/coq/z.vo",
    )

    manifest = build_manifest("coq", files, _rule(), str(switch.root))

    assert [d.directory for d in manifest.directives if isinstance(d, SetOutPath)] == [
        "bin",
        "lib/coq",
        "bin",
        "lib/coq",
    ]
    assert manifest.files == files
    for prev, cur in zip(manifest.directives, manifest.directives[1:]):
        assert not (isinstance(prev, SetOutPath) and isinstance(cur, SetOutPath))


def test_include_applies_before_exclude(switch: SwitchBuilder) -> None:
    files = switch.touch(
        "lib/stublibs/dlllablgtk3_stubs.dll",
        "lib/lablgtk3/gtk.cma",
        "lib/stublibs/dllcairo_stubs.dll.o",
    )

    manifest = build_manifest("lablgtk3", files, _rule(include="stubs.dll$"), str(switch.root))

    assert manifest.files == [files[0]]


def test_default_exclude_drops_bytecode_and_objects(switch: SwitchBuilder) -> None:
    files = switch.touch(
        "bin/coqc.exe",
        "bin/coqc.byte.exe",
        "lib/coq/a.cmi",
        "lib/coq/a.cmo",
        "lib/coq/a.cmx",
        "lib/coq/a.cma",
        "lib/coq/a.cmxa",
        "lib/coq/a.o",
        "lib/coq/a.cmxs",
    )

    manifest = build_manifest("coq", files, _rule(), str(switch.root))

    assert manifest.files == [files[0], files[-1]]


def test_directories_in_inventory_are_skipped(switch: SwitchBuilder) -> None:
    files = switch.touch("share/doc/readme.txt")
    inventory = [switch.path("share"), switch.path("share/doc"), *files]

    manifest = build_manifest("doc", inventory, _rule(), str(switch.root))

    assert manifest.directives == [SetOutPath("share/doc"), CopyFile(files[0])]


def test_missing_file_is_an_integrity_error(switch: SwitchBuilder) -> None:
    files = switch.touch("bin/ok.exe")
    missing = switch.path("bin/gone.exe")

    with pytest.raises(InventoryIntegrityError) as excinfo:
        build_manifest("broken", [*files, missing], _rule(), str(switch.root))

    assert excinfo.value.package == "broken"
    assert excinfo.value.path == missing
    assert "broken" in str(excinfo.value)


def test_missing_file_that_is_filtered_out_is_ignored(switch: SwitchBuilder) -> None:
    files = switch.touch("bin/ok.exe")

    manifest = build_manifest("pkg", [*files, switch.path("lib/gone.cma")], _rule(), str(switch.root))

    assert manifest.files == files


def test_header_names_the_filters(switch: SwitchBuilder) -> None:
    manifest = build_manifest("dune", [], _rule(include=".^"), str(switch.root))

    assert manifest.header == f"# File list for dune matching .^ excluding {DEFAULT_EXCLUDE}"
    assert manifest.render() == manifest.header + "\n"


def test_render_uses_windows_paths() -> None:
    manifest = Manifest(package="coq")
    manifest.add_file("/opam/default/bin/coqc.exe", "bin")
    manifest.add_file("/opam/default/lib/coq/theories/Init/Prelude.vo", "lib/coq/theories/Init")

    assert manifest.render().splitlines() == [
        "SetOutPath $INSTDIR\\bin",
        "FILE \\opam\\default\\bin\\coqc.exe",
        "SetOutPath $INSTDIR\\lib\\coq\\theories\\Init",
        "FILE \\opam\\default\\lib\\coq\\theories\\Init\\Prelude.vo",
    ]


def test_appends_continue_the_current_directory() -> None:
    manifest = Manifest(package="coq")
    manifest.add_file("/r/bin/coqc.exe", "bin")

    manifest.add_file("C:\\cygwin64\\mingw\\bin\\libgmp-10.dll", "bin")

    assert [type(d) for d in manifest.directives] == [SetOutPath, CopyFile, CopyFile]


def test_file_entry_strips_root_on_path_boundary() -> None:
    entry = FileEntry.from_source("/opam/default/lib/coq/a.vo", "/opam/default/")

    assert entry.relpath == "lib/coq/a.vo"
    assert entry.out_dir == "lib/coq"

    outside = FileEntry.from_source("/opam/default2/bin/x.exe", "/opam/default")
    assert outside.relpath == "opam/default2/bin/x.exe"
