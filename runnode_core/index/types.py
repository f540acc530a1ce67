"""Typed rows of the remote release index."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

_VERSION_RE = re.compile(r"^v(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True)
class ReleaseIndexEntry:
    version: str
    lts_label: str | None = None

    @property
    def major(self) -> int:
        return parse_major(self.version)

    @property
    def is_lts(self) -> bool:
        return is_lts_label(self.lts_label)


def parse_major(version: str) -> int:
    match = _VERSION_RE.match((version or "").strip())
    if not match:
        raise ValueError(f"invalid release version: {version!r} (expected vX.Y.Z)")
    return int(match.group(1))


def is_lts_label(label: str | None) -> bool:
    if label is None:
        return False
    value = label.strip()
    return bool(value) and value.lower() != "false"


def _normalize_label(raw: Any) -> str | None:
    # The index encodes "not LTS" as JSON false and LTS lines by codename.
    if raw is None or raw is False:
        return None
    if raw is True:
        return "true"
    if isinstance(raw, str):
        return raw
    return None


def parse_index_entry(raw: Any) -> ReleaseIndexEntry | None:
    if not isinstance(raw, dict):
        return None
    version = raw.get("version")
    if not isinstance(version, str) or not _VERSION_RE.match(version.strip()):
        return None
    return ReleaseIndexEntry(version=version.strip(), lts_label=_normalize_label(raw.get("lts")))


def parse_index_document(document: Iterable[Any]) -> list[ReleaseIndexEntry]:
    entries: list[ReleaseIndexEntry] = []
    for raw in document:
        entry = parse_index_entry(raw)
        if entry is not None:
            entries.append(entry)
    return entries
