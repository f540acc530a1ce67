"""Project-local major version lock."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from runnode_core.errors import LockFileError


class LockStore(Protocol):
    def read(self) -> int | None: ...

    def write(self, major: int) -> None: ...


class FileLockStore:
    """Stores the locked major version as a plain integer in a text file.

    Only a missing file means "no lock". A file that exists but does not hold
    a non-negative integer raises ``LockFileError`` and is left as it is.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> int | None:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise LockFileError(f"cannot read major version lock {self.path}: {exc}") from exc
        try:
            major = int(raw)
        except ValueError as exc:
            raise LockFileError(
                f"malformed major version lock {self.path}: {raw!r} (expected a major version such as 20)"
            ) from exc
        if major < 0:
            raise LockFileError(f"negative major version lock {self.path}: {major}")
        return major

    def write(self, major: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(int(major)), encoding="utf-8")
