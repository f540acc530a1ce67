"""Shared archive/version store and project exposure."""

from .archives import ArchiveDownloader, ArchiveStore
from .exposure import clear_exposure, link_version_tree, rebuild_exposure
from .extract import extract_archive, safe_output_path, strip_components
from .reconciler import ReconcileReport, StoreReconciler

__all__ = [
    "ArchiveDownloader",
    "ArchiveStore",
    "ReconcileReport",
    "StoreReconciler",
    "clear_exposure",
    "extract_archive",
    "link_version_tree",
    "rebuild_exposure",
    "safe_output_path",
    "strip_components",
]
