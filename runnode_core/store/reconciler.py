"""Bring the shared store and the project exposure directory in line with one version."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from runnode_core.errors import StoreIntegrityError
from runnode_core.layout import LOCK_FILENAME, RUNTIME_BINARY, StoreLayout

from .archives import ArchiveDownloader, ArchiveStore
from .exposure import rebuild_exposure
from .extract import extract_archive

logger = logging.getLogger(__name__)

Extractor = Callable[[Path, Path], object]


@dataclass(frozen=True)
class ReconcileReport:
    version: str
    binary: Path
    downloaded: bool
    extracted: bool
    links: tuple[Path, ...] = field(default_factory=tuple)


class StoreReconciler:
    """Ensures a version is downloaded, extracted once and exposed to the project.

    Every step checks its own postcondition first, so a second call with an
    unchanged filesystem performs no download and no extraction.
    """

    def __init__(
        self,
        layout: StoreLayout,
        downloader: ArchiveDownloader,
        extractor: Extractor = extract_archive,
    ) -> None:
        self.layout = layout
        self.archives = ArchiveStore(layout)
        self.downloader = downloader
        self.extractor = extractor

    def _ensure_extracted(self, version: str, archive_path: Path) -> bool:
        binary = self.layout.runtime_binary(version)
        if binary.exists():
            logger.info("Using cached extraction: %s", self.layout.version_dir(version))
            return False
        extract_dir = self.layout.version_dir(version)
        extract_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Extracting to %s", extract_dir)
        self.extractor(archive_path, extract_dir)
        return True

    def reconcile(self, version: str, exposure_dir: Path) -> ReconcileReport:
        self.layout.ensure()
        archive_path, downloaded = self.archives.ensure(version, self.downloader)
        extracted = self._ensure_extracted(version, archive_path)

        links = rebuild_exposure(
            self.layout.version_dir(version),
            exposure_dir,
            keep=exposure_dir / LOCK_FILENAME,
        )

        binary = exposure_dir / RUNTIME_BINARY
        if not binary.exists():
            raise StoreIntegrityError(f"{RUNTIME_BINARY} not found in {exposure_dir} for {version}")
        return ReconcileReport(
            version=version,
            binary=binary,
            downloaded=downloaded,
            extracted=extracted,
            links=tuple(links),
        )

    def ensure_available(self, version: str, exposure_dir: Path) -> Path:
        return self.reconcile(version, exposure_dir).binary
