from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import FakeDistribution
from runnode_core.errors import LockFileError, NoMatchingReleaseError, UsageError
from runnode_core.pipeline import RunNodePipeline, split_invocation
from runnode_core.settings import RunNodeSettings, load_settings

INDEX = [
    {"version": "v23.4.0", "lts": False},
    {"version": "v22.12.0", "lts": "Jod"},
    {"version": "v20.18.1", "lts": "Iron"},
    {"version": "v20.18.0", "lts": "Iron"},
]


class _Recorder:
    def __init__(self, status: int = 0) -> None:
        self.status = status
        self.launches: list[tuple[Path, tuple[str, ...]]] = []
        self.commands: list[list[str]] = []

    def launch(self, binary: Path, args) -> int:
        self.launches.append((binary, tuple(args)))
        return self.status

    def run(self, command, **kwargs) -> None:
        del kwargs
        self.commands.append(list(command))


def _pipeline(tmp_path: Path, distribution: FakeDistribution, recorder: _Recorder, *, install: bool = True):
    settings = RunNodeSettings(
        store_root=tmp_path / "store",
        project_root=tmp_path / "project",
        install=install,
    )
    return RunNodePipeline(
        settings,
        client=distribution,
        runner=recorder.run,
        launcher=recorder.launch,
    )


@pytest.fixture
def seeded(distribution: FakeDistribution) -> FakeDistribution:
    distribution.index = list(INDEX)
    for version in ("v22.12.0", "v20.18.1", "v16.0.0"):
        distribution.add_release(version)
    return distribution


def test_split_invocation() -> None:
    assert split_invocation(["v20.1.0", "app.js"]).pin == "v20.1.0"
    assert split_invocation(["v20.1.0", "app.js"]).args == ("app.js",)
    assert split_invocation(["--version"]).pin is None
    assert split_invocation(["--version"]).args == ("--version",)
    assert split_invocation([]).args == ()


def test_first_run_locks_latest_lts_and_launches(tmp_path: Path, seeded: FakeDistribution) -> None:
    recorder = _Recorder(status=0)

    code = _pipeline(tmp_path, seeded, recorder).run(["app.js", "--flag"])

    project_node = tmp_path / "project" / ".node"
    assert code == 0
    assert (project_node / "version.txt").read_text(encoding="utf-8") == "22"
    assert recorder.launches == [(project_node / "bin" / "node", ("app.js", "--flag"))]
    assert seeded.downloads == ["/v22.12.0/node-v22.12.0-linux-x64.tar.xz"]
    assert recorder.commands == []


def test_existing_lock_keeps_project_on_its_major(tmp_path: Path, seeded: FakeDistribution) -> None:
    lock = tmp_path / "project" / ".node" / "version.txt"
    lock.parent.mkdir(parents=True)
    lock.write_text("20", encoding="utf-8")
    recorder = _Recorder()

    pipeline = _pipeline(tmp_path, seeded, recorder)
    prepared = pipeline.prepare()

    assert prepared.resolved.version == "v20.18.1"
    assert lock.read_text(encoding="utf-8") == "20"
    assert prepared.binary.resolve() == (tmp_path / "store" / "versions" / "v20.18.1" / "bin" / "node").resolve()


def test_pin_skips_index_and_lock(tmp_path: Path, seeded: FakeDistribution) -> None:
    recorder = _Recorder()

    _pipeline(tmp_path, seeded, recorder).run(["v16.0.0", "-e", "1"])

    assert seeded.index_calls == 0
    assert not (tmp_path / "project" / ".node" / "version.txt").exists()
    assert recorder.launches[0][1] == ("-e", "1")


def test_manifest_triggers_install_before_launch(tmp_path: Path, seeded: FakeDistribution) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "package.json").write_text(json.dumps({"packageManager": "yarn@4.1.1"}), encoding="utf-8")
    recorder = _Recorder()

    _pipeline(tmp_path, seeded, recorder).run(["index.js"])

    assert [command[2] for command in recorder.commands] == ["install", "yarn@4.1.1"]
    assert len(recorder.launches) == 1


def test_install_can_be_disabled(tmp_path: Path, seeded: FakeDistribution) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "package.json").write_text("{}", encoding="utf-8")
    recorder = _Recorder()

    _pipeline(tmp_path, seeded, recorder, install=False).run(["index.js"])

    assert recorder.commands == []


def test_missing_forwarded_arguments_is_a_usage_error(tmp_path: Path, seeded: FakeDistribution) -> None:
    recorder = _Recorder()
    with pytest.raises(UsageError):
        _pipeline(tmp_path, seeded, recorder).run([])
    assert recorder.launches == []
    # the store is still prepared for the next run
    assert (tmp_path / "project" / ".node" / "bin" / "node").exists()


def test_index_without_lts_fails(tmp_path: Path, distribution: FakeDistribution) -> None:
    distribution.index = [{"version": "v23.4.0", "lts": False}]
    with pytest.raises(NoMatchingReleaseError):
        _pipeline(tmp_path, distribution, _Recorder()).run(["app.js"])
    assert not (tmp_path / "project" / ".node" / "version.txt").exists()


@pytest.mark.parametrize("content", ["v20", "-3", ""])
def test_malformed_lock_stops_the_run_and_is_kept(tmp_path: Path, seeded: FakeDistribution, content: str) -> None:
    lock = tmp_path / "project" / ".node" / "version.txt"
    lock.parent.mkdir(parents=True)
    lock.write_text(content, encoding="utf-8")
    recorder = _Recorder()

    with pytest.raises(LockFileError):
        _pipeline(tmp_path, seeded, recorder).run(["x.js"])

    assert lock.read_text(encoding="utf-8") == content
    assert seeded.downloads == []
    assert recorder.launches == []


def test_pin_still_runs_with_malformed_lock(tmp_path: Path, seeded: FakeDistribution) -> None:
    lock = tmp_path / "project" / ".node" / "version.txt"
    lock.parent.mkdir(parents=True)
    lock.write_text("v20", encoding="utf-8")
    recorder = _Recorder()

    _pipeline(tmp_path, seeded, recorder).run(["v16.0.0", "x.js"])

    assert lock.read_text(encoding="utf-8") == "v20"
    assert recorder.launches[0][1] == ("x.js",)


def test_relative_store_home_runs_from_cache(
    tmp_path: Path, seeded: FakeDistribution, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    project = tmp_path / "project"
    project.mkdir()
    settings = load_settings(project_root=project, environ={"RUNNODE_HOME": "store"})
    recorder = _Recorder()

    for _ in range(2):
        RunNodePipeline(settings, client=seeded, runner=recorder.run, launcher=recorder.launch).run(["--version"])

    assert len(seeded.downloads) == 1
    assert recorder.launches[-1] == (project / ".node" / "bin" / "node", ("--version",))
    assert (project / ".node" / "bin" / "node").exists()
