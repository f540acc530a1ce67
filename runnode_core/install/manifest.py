"""Reading the package manager declaration from ``package.json``."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_MANAGER = "npm"
_NAME_RE = re.compile(r"^[a-z][a-z0-9._-]*$")


@dataclass(frozen=True)
class PackageManagerSpec:
    name: str
    version: str | None = None

    @property
    def identifier(self) -> str:
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name


FALLBACK_PACKAGE_MANAGER = PackageManagerSpec(name=DEFAULT_PACKAGE_MANAGER)


def parse_package_manager(value: object) -> PackageManagerSpec | None:
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if "@" not in raw:
        return None
    name, version = raw.split("@", 1)
    name = name.strip()
    version = version.strip()
    if not _NAME_RE.match(name) or not version:
        return None
    return PackageManagerSpec(name=name, version=version)


def read_package_manager(manifest_path: Path) -> PackageManagerSpec:
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("cannot read %s (%s); using %s", manifest_path, exc, DEFAULT_PACKAGE_MANAGER)
        return FALLBACK_PACKAGE_MANAGER
    if not isinstance(payload, dict):
        return FALLBACK_PACKAGE_MANAGER
    parsed = parse_package_manager(payload.get("packageManager"))
    if parsed is None:
        if "packageManager" in payload:
            logger.warning("ignoring malformed packageManager %r in %s", payload.get("packageManager"), manifest_path)
        return FALLBACK_PACKAGE_MANAGER
    return parsed
