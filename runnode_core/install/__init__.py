"""Project dependency installation."""

from .installer import DependencyInstaller, package_install_command, tool_install_command
from .manifest import (
    DEFAULT_PACKAGE_MANAGER,
    FALLBACK_PACKAGE_MANAGER,
    PackageManagerSpec,
    parse_package_manager,
    read_package_manager,
)

__all__ = [
    "DEFAULT_PACKAGE_MANAGER",
    "FALLBACK_PACKAGE_MANAGER",
    "DependencyInstaller",
    "PackageManagerSpec",
    "package_install_command",
    "parse_package_manager",
    "read_package_manager",
    "tool_install_command",
]
