"""Child process execution and final process replacement."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
from pathlib import Path
from typing import Mapping, NoReturn, Sequence
from urllib.parse import urlsplit

from .errors import SubprocessError

logger = logging.getLogger(__name__)

_SENSITIVE_KEYS = ("password", "token", "authorization", "bearer")


def redact_command_for_log(command: Sequence[str]) -> list[str]:
    redacted: list[str] = []
    for item in command:
        lower = item.lower()
        if any(key in lower for key in _SENSITIVE_KEYS):
            redacted.append("***")
            continue
        if "://" in item:
            parsed = urlsplit(item)
            if parsed.password:
                safe_netloc = parsed.netloc.replace(parsed.password, "***")
                redacted.append(item.replace(parsed.netloc, safe_netloc))
                continue
        redacted.append(item)
    return redacted


def describe_status(returncode: int) -> str:
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = f"signal {-returncode}"
        return f"killed by {name}"
    return f"exit={returncode}"


def run_checked(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run ``command`` to completion; any non-zero or signal status is fatal."""
    redacted = " ".join(redact_command_for_log(command))
    logger.debug("subprocess cmd=%s cwd=%s", redacted, cwd)
    try:
        result = subprocess.run(
            list(command),
            check=False,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        raise SubprocessError(f"cannot start '{redacted}': {exc}", command=command) from exc
    if result.returncode != 0:
        raise SubprocessError(
            f"command failed ({describe_status(result.returncode)}) cmd='{redacted}'",
            command=command,
            returncode=result.returncode,
        )


def exit_status(returncode: int) -> int:
    # shells report signal deaths as 128 + signal number
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


def exec_runtime(binary: Path, args: Sequence[str]) -> NoReturn:
    argv = [str(binary), *args]
    logger.info("Running %s", binary)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execv(str(binary), argv)
    except OSError as exc:
        raise SubprocessError(f"execv {binary} failed: {exc}", command=argv) from exc
    raise AssertionError("unreachable")


def spawn_runtime(binary: Path, args: Sequence[str]) -> int:
    argv = [str(binary), *args]
    logger.info("Running %s", binary)
    try:
        result = subprocess.run(argv, check=False)
    except OSError as exc:
        raise SubprocessError(f"cannot start {binary}: {exc}", command=argv) from exc
    return exit_status(result.returncode)


def launch(binary: Path, args: Sequence[str], *, replace: bool | None = None) -> int:
    """Hand control to the runtime.

    With process replacement (the default where ``os.execv`` exists) this
    never returns and no cleanup or ``finally`` block of the caller runs.
    Otherwise the runtime runs as a child and its exit status is returned.
    """
    if replace is None:
        replace = hasattr(os, "execv") and os.name == "posix"
    if replace:
        exec_runtime(binary, args)
    return spawn_runtime(binary, args)
