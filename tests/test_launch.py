from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from runnode_core import process
from runnode_core.errors import SubprocessError


def test_launch_replaces_process_image(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: dict[str, object] = {}

    class _Replaced(Exception):
        pass

    def _fake_execv(path, argv):
        seen["path"] = path
        seen["argv"] = argv
        raise _Replaced()

    monkeypatch.setattr(os, "execv", _fake_execv)
    binary = tmp_path / ".node" / "bin" / "node"

    with pytest.raises(_Replaced):
        process.launch(binary, ["--version"], replace=True)

    assert seen["path"] == str(binary)
    assert seen["argv"] == [str(binary), "--version"]


def test_failed_exec_is_a_subprocess_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _fake_execv(path, argv):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "execv", _fake_execv)
    with pytest.raises(SubprocessError, match="execv"):
        process.launch(tmp_path / "node", [], replace=True)


@pytest.mark.parametrize(("returncode", "expected"), [(0, 0), (7, 7), (-15, 143)])
def test_launch_without_replacement_returns_child_status(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, returncode: int, expected: int
) -> None:
    calls: list[list[str]] = []

    def _fake_run(argv, **kwargs):
        calls.append(list(argv))
        return subprocess.CompletedProcess(args=argv, returncode=returncode)

    monkeypatch.setattr(subprocess, "run", _fake_run)
    binary = tmp_path / "node"

    assert process.launch(binary, ["app.js", "--port", "3000"], replace=False) == expected
    assert calls == [[str(binary), "app.js", "--port", "3000"]]
