"""Write-once archive cache keyed by release version."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from runnode_core.layout import StoreLayout, archive_remote_path

logger = logging.getLogger(__name__)


class ArchiveDownloader(Protocol):
    def download(self, remote_path: str, out_path: Path) -> Path: ...


class ArchiveStore:
    def __init__(self, layout: StoreLayout) -> None:
        self.layout = layout

    def path_for(self, version: str) -> Path:
        return self.layout.archive_path(version)

    def contains(self, version: str) -> bool:
        # presence is the only completeness signal
        return self.path_for(version).exists()

    def ensure(self, version: str, downloader: ArchiveDownloader) -> tuple[Path, bool]:
        """Return the archive path and whether it had to be downloaded."""
        path = self.path_for(version)
        if self.contains(version):
            logger.info("Using cached archive: %s", path)
            return path, False
        remote = archive_remote_path(version)
        logger.info("Downloading %s", remote)
        downloader.download(remote, path)
        return path, True
