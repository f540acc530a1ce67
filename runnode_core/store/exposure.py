"""Project exposure directory: a symlink farm over one extracted version."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _remove_entry(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)
    elif os.path.lexists(path):
        path.unlink()


def clear_exposure(exposure_dir: Path, *, keep: Path) -> int:
    """Remove every entry of ``exposure_dir`` except the physical ``keep`` file."""
    removed = 0
    for entry in exposure_dir.iterdir():
        if entry == keep and not entry.is_symlink():
            continue
        _remove_entry(entry)
        removed += 1
    return removed


def link_version_tree(version_dir: Path, exposure_dir: Path, *, keep: Path) -> list[Path]:
    links: list[Path] = []
    # absolute targets: links are resolved from inside exposure_dir
    for entry in sorted(version_dir.absolute().iterdir()):
        dest = exposure_dir / entry.name
        if dest == keep:
            logger.warning("skipping %s: name collides with the major version lock", entry)
            continue
        if os.path.lexists(dest):
            _remove_entry(dest)
        dest.symlink_to(entry, target_is_directory=entry.is_dir())
        links.append(dest)
    return links


def rebuild_exposure(version_dir: Path, exposure_dir: Path, *, keep: Path) -> list[Path]:
    exposure_dir.mkdir(parents=True, exist_ok=True)
    removed = clear_exposure(exposure_dir, keep=keep)
    links = link_version_tree(version_dir, exposure_dir, keep=keep)
    logger.debug("exposure %s: removed=%s linked=%s", exposure_dir, removed, len(links))
    return links
