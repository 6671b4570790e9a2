"""Tests for opam_nsis.build_config."""

from __future__ import annotations

from pathlib import Path

import pytest

from opam_nsis.build_config import DllAugment, load_build_config, merge_config
from opam_nsis.errors import ConfigurationError


def test_defaults_carry_the_platform_tables() -> None:
    cfg = load_build_config()

    assert cfg.output_dir == "windows_installer"
    assert cfg.registry_prefix is None
    assert cfg.selection_allow == "^coq|^menhir|^gappa"
    assert cfg.file_rules["lablgtk3"] == {"include": "stubs.dll$"}
    assert cfg.file_rules["ocaml-variants"] == {"include": ".^"}
    assert cfg.dll_augments[0] == DllAugment(
        executable="coqc", filter="/usr/x86_64-w64-mingw32/sys-root/", package="coq"
    )
    icons = cfg.system_package_augments[0]
    assert icons.manifest == "conf-adwaita-icon-theme"
    assert icons.filter.startswith("/(16x16|22x22|32x32|48x48)/.*(actions/bookmark|")
    assert cfg.use_cygpath is True


def test_user_file_is_merged_over_defaults(tmp_path: Path) -> None:
    user = tmp_path / "platform.yaml"
    user.write_text(
        """
paths:
  output_dir: out/nsis
registry:
  prefix: /home/me/.opam/CP.2024
files:
  rules:
    gappa: {exclude: "\\\\.txt$"}
augment:
  cygpath: false
  dlls: []
""",
        encoding="utf-8",
    )

    cfg = load_build_config(str(user))

    assert cfg.output_dir == "out/nsis"
    assert cfg.registry_prefix == "/home/me/.opam/CP.2024"
    assert cfg.file_rules["gappa"] == {"exclude": "\\.txt$"}
    assert "dune" in cfg.file_rules
    assert cfg.dll_augments == []
    assert cfg.use_cygpath is False
    assert cfg.system_package_augments


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    user = tmp_path / "bad.yaml"
    user.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_build_config(str(user))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_build_config(str(tmp_path / "nope.yaml"))


def test_incomplete_augment_entry(tmp_path: Path) -> None:
    user = tmp_path / "bad.yml"
    user.write_text("augment:\n  dlls:\n    - {executable: coqc}\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_build_config(str(user)).dll_augments


def test_merge_replaces_lists_and_keeps_base() -> None:
    base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}

    merged = merge_config(base, {"a": {"c": [3]}})

    assert merged == {"a": {"b": 1, "c": [3]}, "d": 1}
    assert base["a"]["c"] == [1, 2]


def test_with_overrides() -> None:
    cfg = load_build_config().with_overrides({"paths": {"output_dir": "elsewhere"}})

    assert cfg.output_dir == "elsewhere"
