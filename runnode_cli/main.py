"""run-node: resolve a Node.js release for the current project and run it.

Usage: run-node [vX.Y.Z] <args to node>

The first argument pins a release when it looks like ``v<digit>...``;
every other argument, options included, is forwarded to node untouched.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence

from runnode_core import RunNodeError
from runnode_core.pipeline import RunNodePipeline
from runnode_core.settings import DEFAULT_LOG_LEVEL, RunNodeSettings, load_settings

logger = logging.getLogger("runnode")

EXIT_FAILURE = 1


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.getLevelName(DEFAULT_LOG_LEVEL)
    fmt = "[run-node] %(message)s"
    if level <= logging.DEBUG:
        fmt = "[run-node:%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)


def main(
    argv: Sequence[str] | None = None,
    *,
    start_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    pipeline_factory: Callable[[RunNodeSettings], RunNodePipeline] = RunNodePipeline,
) -> int:
    forwarded = list(sys.argv[1:] if argv is None else argv)
    configure_logging(DEFAULT_LOG_LEVEL)
    try:
        settings = load_settings(project_root=start_dir, environ=environ)
        configure_logging(settings.log_level)
        return pipeline_factory(settings).run(forwarded)
    except RunNodeError as exc:
        logger.error("error: %s", exc)
        return EXIT_FAILURE
    except Exception as exc:  # noqa: BLE001
        logger.debug("unhandled failure", exc_info=True)
        logger.error("error: %s", exc)
        return EXIT_FAILURE
