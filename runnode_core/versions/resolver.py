"""Release selection: explicit pin, or LTS line constrained by the major version lock."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from runnode_core.errors import NoMatchingReleaseError
from runnode_core.index.types import ReleaseIndexEntry

from .lock import LockStore
from .models import Provenance, ResolvedVersion

logger = logging.getLogger(__name__)

_PIN_RE = re.compile(r"^v\d")


def looks_like_pin(value: str | None) -> bool:
    return bool(value) and bool(_PIN_RE.match(value))


def _latest_lts(candidates: Sequence[ReleaseIndexEntry]) -> ReleaseIndexEntry | None:
    best: ReleaseIndexEntry | None = None
    for entry in candidates:
        # strict comparison keeps the first index-order entry within a major
        if best is None or entry.major > best.major:
            best = entry
    return best


def _first_in_major(candidates: Sequence[ReleaseIndexEntry], major: int) -> ReleaseIndexEntry | None:
    for entry in candidates:
        if entry.major == major:
            return entry
    return None


def select_release(
    entries: Sequence[ReleaseIndexEntry],
    explicit_pin: str | None,
    stored_lock: int | None,
) -> ResolvedVersion:
    """Pick exactly one release without touching any storage.

    A pin that looks like a version is returned verbatim and never checked
    against the index. Otherwise only LTS entries are candidates: with no
    lock the highest major wins, with a lock the first entry of that major
    in index order wins.
    """
    if looks_like_pin(explicit_pin):
        return ResolvedVersion(version=explicit_pin, provenance=Provenance.EXPLICIT_PIN)

    candidates = [entry for entry in entries if entry.is_lts]

    if stored_lock is None:
        chosen = _latest_lts(candidates)
        if chosen is None:
            raise NoMatchingReleaseError("no LTS release found in the release index")
        return ResolvedVersion(
            version=chosen.version,
            provenance=Provenance.FIRST_RUN_LATEST_LTS,
            major=chosen.major,
        )

    chosen = _first_in_major(candidates, stored_lock)
    if chosen is None:
        raise NoMatchingReleaseError(f"no LTS release found for locked major version {stored_lock}")
    return ResolvedVersion(version=chosen.version, provenance=Provenance.LOCKED_MAJOR, major=chosen.major)


class VersionResolver:
    def __init__(self, lock_store: LockStore) -> None:
        self.lock_store = lock_store

    def resolve(self, entries: Sequence[ReleaseIndexEntry], explicit_pin: str | None = None) -> ResolvedVersion:
        if looks_like_pin(explicit_pin):
            resolved = select_release(entries, explicit_pin, None)
            logger.debug("explicit pin %s bypasses the major version lock", explicit_pin)
            return resolved

        stored = self.lock_store.read()
        if stored is not None:
            logger.info("Cached major version: %s", stored)
        resolved = select_release(entries, None, stored)
        if resolved.writes_lock and resolved.major is not None:
            self.lock_store.write(resolved.major)
            logger.debug("locked project to major version %s", resolved.major)
        return resolved
