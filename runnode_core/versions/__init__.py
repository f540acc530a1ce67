"""Version resolution against the release index and the project lock."""

from .lock import FileLockStore, LockStore
from .models import Provenance, ResolvedVersion
from .resolver import VersionResolver, looks_like_pin, select_release

__all__ = [
    "FileLockStore",
    "LockStore",
    "Provenance",
    "ResolvedVersion",
    "VersionResolver",
    "looks_like_pin",
    "select_release",
]
