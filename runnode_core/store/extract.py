"""Streaming tar.xz extraction with leading path component stripping."""

from __future__ import annotations

import logging
import lzma
import tarfile
from pathlib import Path, PurePosixPath

from runnode_core.errors import ExtractionFailedError

logger = logging.getLogger(__name__)


def strip_components(name: str, count: int = 1) -> str | None:
    """Drop ``count`` leading segments; entries without enough segments are skipped."""
    parts = [part for part in PurePosixPath(name).parts if part not in ("", ".")]
    if len(parts) <= count:
        return None
    return "/".join(parts[count:])


def safe_output_path(base_dir: Path, relative_path: str) -> Path:
    target = (base_dir / relative_path).resolve()
    root = base_dir.resolve()
    if target == root:
        return target
    if root not in target.parents:
        raise ExtractionFailedError(f"path traversal blocked for archive entry: {relative_path}")
    return target


def _rewrite_member(member: tarfile.TarInfo, count: int) -> tarfile.TarInfo | None:
    stripped = strip_components(member.name, count)
    if stripped is None:
        return None
    rewritten = member.replace(name=stripped, deep=False)
    if member.islnk():
        link_target = strip_components(member.linkname, count)
        if link_target is None:
            return None
        rewritten = rewritten.replace(linkname=link_target, deep=False)
    return rewritten


def extract_archive(archive_path: Path, dest_dir: Path, *, strip: int = 1) -> int:
    """Unpack ``archive_path`` into ``dest_dir`` and return the number of entries written."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    written = 0
    try:
        with tarfile.open(archive_path, mode="r:xz") as tf:
            for member in tf:
                rewritten = _rewrite_member(member, strip)
                if rewritten is None:
                    continue
                safe_output_path(dest_dir, rewritten.name)
                tf.extract(rewritten, dest_dir, filter="tar")
                written += 1
    except (tarfile.TarError, lzma.LZMAError, OSError, EOFError) as exc:
        raise ExtractionFailedError(f"extraction of {archive_path} failed: {exc}") from exc
    logger.debug("extracted %s entries from %s into %s", written, archive_path, dest_dir)
    return written
