"""One run-node invocation: resolve, reconcile, install, launch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .errors import UsageError
from .index import DistributionClient, ReleaseIndexEntry
from .install import DependencyInstaller
from .layout import ProjectLayout, StoreLayout
from .process import launch, run_checked
from .settings import RunNodeSettings
from .store import StoreReconciler, extract_archive
from .store.reconciler import Extractor
from .versions import FileLockStore, ResolvedVersion, VersionResolver, looks_like_pin

logger = logging.getLogger(__name__)

Launcher = Callable[[Path, Sequence[str]], int]


@dataclass(frozen=True)
class Invocation:
    pin: str | None
    args: tuple[str, ...] = field(default_factory=tuple)


def split_invocation(argv: Sequence[str]) -> Invocation:
    """Treat the first argument as a pin only when it looks like ``v<digit>...``."""
    items = list(argv)
    if items and looks_like_pin(items[0]):
        return Invocation(pin=items[0], args=tuple(items[1:]))
    return Invocation(pin=None, args=tuple(items))


@dataclass(frozen=True)
class PreparedRuntime:
    resolved: ResolvedVersion
    binary: Path


class RunNodePipeline:
    def __init__(
        self,
        settings: RunNodeSettings,
        *,
        client: DistributionClient | None = None,
        extractor: Extractor = extract_archive,
        runner: Callable[..., None] = run_checked,
        launcher: Launcher = launch,
    ) -> None:
        self.settings = settings
        self.store = StoreLayout(settings.store_root)
        self.project = ProjectLayout(settings.project_root)
        self.client = client or DistributionClient(settings.dist_url, timeout=settings.timeout_seconds)
        self.resolver = VersionResolver(FileLockStore(self.project.lock_path))
        self.reconciler = StoreReconciler(self.store, self.client, extractor)
        self.installer = DependencyInstaller(self.project, runner=runner)
        self.launcher = launcher

    def _index(self, pin: str | None) -> list[ReleaseIndexEntry]:
        if pin is not None:
            return []
        return self.client.fetch_index()

    def prepare(self, pin: str | None = None) -> PreparedRuntime:
        self.project.ensure()
        self.store.ensure()
        resolved = self.resolver.resolve(self._index(pin), pin)
        logger.info("Using Node.js version: %s (%s)", resolved.version, resolved.provenance.value)
        binary = self.reconciler.ensure_available(resolved.version, self.project.exposure_dir)
        return PreparedRuntime(resolved=resolved, binary=binary)

    def run(self, argv: Sequence[str]) -> int:
        invocation = split_invocation(argv)
        prepared = self.prepare(invocation.pin)
        if not invocation.args:
            raise UsageError("usage: run-node [vX.Y.Z] <args to node>")
        if self.settings.install:
            self.installer.run(prepared.binary)
        return self.launcher(prepared.binary, invocation.args)
