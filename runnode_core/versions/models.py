"""Resolution outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Provenance(Enum):
    EXPLICIT_PIN = "explicit-pin"
    LOCKED_MAJOR = "locked-major"
    FIRST_RUN_LATEST_LTS = "first-run-latest-lts"


@dataclass(frozen=True)
class ResolvedVersion:
    version: str
    provenance: Provenance
    major: int | None = None

    @property
    def writes_lock(self) -> bool:
        return self.provenance is Provenance.FIRST_RUN_LATEST_LTS
