"""Dependency installation chain run through the resolved runtime."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Sequence

from runnode_core.layout import ProjectLayout
from runnode_core.process import run_checked

from .manifest import PackageManagerSpec, read_package_manager

logger = logging.getLogger(__name__)

INSTALL_TOOL = "corepack"
Runner = Callable[..., None]


def tool_install_command(node: Path, project: ProjectLayout) -> list[str]:
    return [str(node), str(project.exposed_tool("npm")), "install", "--global", INSTALL_TOOL]


def package_install_command(node: Path, project: ProjectLayout, spec: PackageManagerSpec) -> list[str]:
    return [str(node), str(project.exposed_tool(INSTALL_TOOL)), spec.identifier, "install"]


def _install_env(node: Path, base: Mapping[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base is None else base)
    bin_dir = str(node.parent)
    current = env.get("PATH", "")
    env["PATH"] = os.pathsep.join([bin_dir, current]) if current else bin_dir
    env.setdefault("COREPACK_ENABLE_DOWNLOAD_PROMPT", "0")
    return env


class DependencyInstaller:
    """Installs corepack with the exposed npm, then runs the declared package manager."""

    def __init__(self, project: ProjectLayout, *, runner: Runner = run_checked) -> None:
        self.project = project
        self.runner = runner

    def commands(self, node: Path) -> list[Sequence[str]]:
        spec = read_package_manager(self.project.manifest_path)
        return [
            tool_install_command(node, self.project),
            package_install_command(node, self.project, spec),
        ]

    def run(self, node: Path, *, environ: Mapping[str, str] | None = None) -> bool:
        """Return False when there is no manifest and nothing ran."""
        if not self.project.manifest_path.exists():
            logger.info("No %s in %s; skipping install", self.project.manifest_path.name, self.project.root)
            return False
        env = _install_env(node, environ)
        for command in self.commands(node):
            logger.info("Installing: %s", " ".join(command[1:]))
            self.runner(command, cwd=self.project.root, env=env)
        return True
