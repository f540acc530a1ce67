"""Error taxonomy for run-node invocations."""

from __future__ import annotations

from typing import Sequence


class RunNodeError(RuntimeError):
    """Base error for every handled run-node failure."""


class NoMatchingReleaseError(RunNodeError):
    """No release in the index satisfies the selection rule."""


class TransportError(RunNodeError):
    """Fetching the release index or an archive failed."""


class ExtractionFailedError(RunNodeError):
    """The archive could not be unpacked into the store."""


class StoreIntegrityError(RunNodeError):
    """The runtime binary is missing after a full reconciliation pass."""


class SubprocessError(RunNodeError):
    """A child process exited non-zero or was killed by a signal."""

    def __init__(self, message: str, *, command: Sequence[str] = (), returncode: int | None = None) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode


class UsageError(RunNodeError):
    """The invocation is missing required input."""


class LockFileError(RunNodeError):
    """The project's major version lock exists but cannot be used."""
