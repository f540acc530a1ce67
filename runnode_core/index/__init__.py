"""Remote release index access."""

from .client import INDEX_PATH, DistributionClient
from .types import ReleaseIndexEntry, is_lts_label, parse_index_document, parse_index_entry, parse_major

__all__ = [
    "INDEX_PATH",
    "DistributionClient",
    "ReleaseIndexEntry",
    "is_lts_label",
    "parse_index_document",
    "parse_index_entry",
    "parse_major",
]
