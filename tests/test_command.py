"""Tests for opam_nsis.lib.command."""

from __future__ import annotations

import sys

import pytest

from opam_nsis.lib.command import CommandError, run_cmd


def test_stdout_lines() -> None:
    res = run_cmd([sys.executable, "-c", "print('coq'); print(''); print('  gappa ')"])

    assert res.returncode == 0
    assert res.lines() == ["coq", "gappa"]


def test_failure_raises_with_stderr() -> None:
    with pytest.raises(CommandError) as excinfo:
        run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])

    assert excinfo.value.returncode == 3
    assert "boom" in excinfo.value.stderr


def test_failure_can_be_tolerated() -> None:
    res = run_cmd([sys.executable, "-c", "import sys; sys.exit(1)"], check=False)

    assert res.returncode == 1


def test_missing_executable() -> None:
    with pytest.raises(CommandError):
        run_cmd(["opam-nsis-no-such-tool"])
