from __future__ import annotations

import io
import shutil
import tarfile
from pathlib import Path

import pytest

from runnode_core.layout import archive_filename


def _add_dir(tf: tarfile.TarFile, name: str) -> None:
    info = tarfile.TarInfo(name)
    info.type = tarfile.DIRTYPE
    info.mode = 0o755
    tf.addfile(info)


def _add_file(tf: tarfile.TarFile, name: str, data: bytes, mode: int = 0o644) -> None:
    info = tarfile.TarInfo(name)
    info.size = len(data)
    info.mode = mode
    tf.addfile(info, io.BytesIO(data))


def _add_symlink(tf: tarfile.TarFile, name: str, target: str) -> None:
    info = tarfile.TarInfo(name)
    info.type = tarfile.SYMTYPE
    info.linkname = target
    tf.addfile(info)


def build_node_archive(path: Path, version: str, *, with_binary: bool = True, extra_top: str | None = None) -> Path:
    """Write a tar.xz shaped like an official Node.js linux-x64 release."""
    top = f"node-{version}-linux-x64"
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:xz") as tf:
        _add_dir(tf, top)
        _add_dir(tf, f"{top}/bin")
        if with_binary:
            _add_file(tf, f"{top}/bin/node", f"#!/bin/sh\necho {version}\n".encode(), mode=0o755)
        _add_dir(tf, f"{top}/lib")
        _add_dir(tf, f"{top}/lib/node_modules")
        _add_file(tf, f"{top}/lib/node_modules/npm-cli.js", b"// npm\n")
        _add_symlink(tf, f"{top}/bin/npm", "../lib/node_modules/npm-cli.js")
        _add_file(tf, f"{top}/README.md", f"Node.js {version}\n".encode())
        if extra_top:
            _add_file(tf, f"{top}/{extra_top}", b"extra\n")
    return path


class FakeDistribution:
    """Stands in for DistributionClient: serves an index and locally built archives."""

    def __init__(self, archive_dir: Path, index: list[dict] | None = None) -> None:
        self.archive_dir = archive_dir
        self.index = list(index or [])
        self.index_calls = 0
        self.downloads: list[str] = []

    def add_release(self, version: str, **kwargs) -> Path:
        return build_node_archive(self.archive_dir / archive_filename(version), version, **kwargs)

    def fetch_index(self):
        from runnode_core.index import parse_index_document

        self.index_calls += 1
        return parse_index_document(self.index)

    def download(self, remote_path: str, out_path: Path) -> Path:
        self.downloads.append(remote_path)
        source = self.archive_dir / remote_path.rsplit("/", 1)[-1]
        out_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, out_path)
        return out_path


@pytest.fixture
def distribution(tmp_path: Path) -> FakeDistribution:
    return FakeDistribution(tmp_path / "remote")
