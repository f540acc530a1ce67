"""Runtime settings resolved from arguments, environment and the store config file."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import UsageError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
DEFAULT_DIST_URL = "https://nodejs.org/dist"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"
STORE_SUBDIR = Path(".local") / "share" / "run-node"


@dataclass(frozen=True)
class RunNodeSettings:
    store_root: Path
    project_root: Path
    dist_url: str = DEFAULT_DIST_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    install: bool = True


def _to_optional_bool(value: Any) -> bool | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return bool(value)


def _to_optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def default_store_root(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    explicit = str(env.get("RUNNODE_HOME") or "").strip()
    if explicit:
        return Path(explicit).expanduser().resolve()
    home = str(env.get("HOME") or "").strip()
    if not home:
        raise UsageError("HOME is not set; export HOME or RUNNODE_HOME to locate the store")
    return (Path(home).expanduser() / STORE_SUBDIR).resolve()


def load_store_config(store_root: Path) -> dict[str, object]:
    config_path = store_root / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    try:
        payload = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    section = payload.get("runnode")
    return section if isinstance(section, dict) else {}


def load_settings(
    *,
    store_root: Path | None = None,
    project_root: Path | None = None,
    dist_url: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunNodeSettings:
    env = os.environ if environ is None else environ
    root = store_root.expanduser().resolve() if store_root is not None else default_store_root(env)
    config = load_store_config(root)

    dist_value = (
        dist_url
        or str(env.get("RUNNODE_DIST_URL") or "").strip()
        or str(config.get("dist_url") or "").strip()
        or DEFAULT_DIST_URL
    )

    timeout = _to_optional_float(env.get("RUNNODE_TIMEOUT"))
    if timeout is None:
        timeout = _to_optional_float(config.get("timeout_seconds"))
    if timeout is None:
        timeout = DEFAULT_TIMEOUT_SECONDS

    log_level = (
        str(env.get("RUNNODE_LOG_LEVEL") or "").strip()
        or str(config.get("log_level") or "").strip()
        or DEFAULT_LOG_LEVEL
    ).upper()

    install = True
    if _to_optional_bool(env.get("RUNNODE_SKIP_INSTALL")):
        install = False
    else:
        configured = _to_optional_bool(config.get("install"))
        if configured is not None:
            install = configured

    return RunNodeSettings(
        store_root=root,
        project_root=(project_root or Path.cwd()).resolve(),
        dist_url=dist_value.rstrip("/"),
        timeout_seconds=max(timeout, 1.0),
        log_level=log_level,
        install=install,
    )
