"""Core workspace functionality."""

from .paths import InvalidRelativePath, relative_path
from .platform import Platform, PlatformResolver, ResolutionError, ResolvedSource
from .resources import MissingResourceError, Resource
from .synchronizer import (
    SourceNotADirectory,
    SourceNotFound,
    SyncError,
    SyncReport,
    WorkspaceSynchronizer,
)
from .write_rules import ShouldOverwriteWriteRule, WriteRule

__all__ = [
    "InvalidRelativePath",
    "MissingResourceError",
    "Platform",
    "PlatformResolver",
    "ResolutionError",
    "ResolvedSource",
    "Resource",
    "ShouldOverwriteWriteRule",
    "SourceNotADirectory",
    "SourceNotFound",
    "SyncError",
    "SyncReport",
    "WorkspaceSynchronizer",
    "WriteRule",
    "relative_path",
]
