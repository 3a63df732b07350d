"""Data models for the workspace tool."""

from .config import (
    ConfigError,
    SyncOptions,
    UserConfig,
    WorkspaceConfig,
    effective_platform,
    parse_properties,
)
from .dependencies import Dependency, Placement, plugin_dependencies, project_dependencies

__all__ = [
    "ConfigError",
    "Dependency",
    "Placement",
    "SyncOptions",
    "UserConfig",
    "WorkspaceConfig",
    "effective_platform",
    "parse_properties",
    "plugin_dependencies",
    "project_dependencies",
]
