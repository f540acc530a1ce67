"""Filesystem layout of the shared store and the project exposure directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

RUNTIME_NAME = "node"
PLATFORM = "linux-x64"
ARCHIVE_EXTENSION = "tar.xz"
RUNTIME_BINARY = Path("bin") / RUNTIME_NAME

EXPOSURE_DIRNAME = ".node"
LOCK_FILENAME = "version.txt"
MANIFEST_FILENAME = "package.json"


def archive_filename(version: str) -> str:
    return f"{RUNTIME_NAME}-{version}-{PLATFORM}.{ARCHIVE_EXTENSION}"


def archive_remote_path(version: str) -> str:
    return f"/{version}/{archive_filename(version)}"


@dataclass(frozen=True)
class StoreLayout:
    """Shared cache: one archive and one extracted tree per version."""

    root: Path

    @property
    def archives_dir(self) -> Path:
        return self.root / "archives"

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    def archive_path(self, version: str) -> Path:
        return self.archives_dir / archive_filename(version)

    def version_dir(self, version: str) -> Path:
        return self.versions_dir / version

    def runtime_binary(self, version: str) -> Path:
        return self.version_dir(version) / RUNTIME_BINARY

    def ensure(self) -> None:
        self.archives_dir.mkdir(parents=True, exist_ok=True)
        self.versions_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class ProjectLayout:
    root: Path

    @property
    def exposure_dir(self) -> Path:
        return self.root / EXPOSURE_DIRNAME

    @property
    def lock_path(self) -> Path:
        return self.exposure_dir / LOCK_FILENAME

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    @property
    def runtime_binary(self) -> Path:
        return self.exposure_dir / RUNTIME_BINARY

    def exposed_tool(self, name: str) -> Path:
        return self.exposure_dir / "bin" / name

    def ensure(self) -> None:
        self.exposure_dir.mkdir(parents=True, exist_ok=True)
