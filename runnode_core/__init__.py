"""Core library for run-node: release resolution, store reconciliation and launch."""

from .errors import (
    ExtractionFailedError,
    LockFileError,
    NoMatchingReleaseError,
    RunNodeError,
    StoreIntegrityError,
    SubprocessError,
    TransportError,
    UsageError,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "RunNodeError",
    "NoMatchingReleaseError",
    "TransportError",
    "ExtractionFailedError",
    "StoreIntegrityError",
    "LockFileError",
    "SubprocessError",
    "UsageError",
]
