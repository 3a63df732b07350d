"""Copies a game installation into a workspace directory.

The source tree is walked depth first. Player data and other runtime clutter
(logs, screenshots, saves, ...) is left behind, symlinked directories are never
followed, and files already in the workspace are kept unless overwriting was
requested. After the copy a patchline marker records what was synced.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .. import TOOL_NAME, __version__
from ..models.config import SyncOptions
from .paths import normalize, relative_path
from .platform import PlatformResolver
from .write_rules import ShouldOverwriteWriteRule, WriteRule


logger = logging.getLogger(__name__)

EXCLUDED_DIRECTORIES = frozenset({
    "backup",
    "feedback",
    "logs",
    "out",
    "players",
    "screenshots",
})

MARKER_FILENAME = "patchline.txt"


class SourceNotFound(FileNotFoundError):
    """Raised when the directory to copy from does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Source directory does not exist: {path}")
        self.path = path


class SourceNotADirectory(NotADirectoryError):
    """Raised when the path to copy from is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Source is not a directory: {path}")
        self.path = path


class SyncError(Exception):
    """Raised when synchronization fails. Wraps the underlying error."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(message)
        self.cause = cause


@dataclass
class SyncReport:
    """Outcome of a successful synchronization."""

    source: Path
    destination: Path
    files_copied: int = 0
    files_skipped: int = 0
    directories: int = 0
    excluded: list[str] = field(default_factory=list)  # relative paths of pruned dirs
    marker_path: Path | None = None

    def summary(self) -> str:
        return (
            f"{self.files_copied} copied, {self.files_skipped} skipped, "
            f"{len(self.excluded)} directories excluded"
        )


def _raise(error: OSError) -> None:
    raise error


class WorkspaceSynchronizer:
    """Populates a workspace from a game installation."""

    def __init__(
        self,
        resolver: PlatformResolver | None = None,
        excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
        tool_name: str = TOOL_NAME,
        tool_version: str = __version__,
        rules: list[WriteRule] | None = None,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            resolver: Used by sync_platform to find the install directory
            excluded: Directory names that are never copied
            tool_name: Name recorded in the marker file
            tool_version: Version recorded in the marker file
            rules: Write rules checked before the overwrite setting, first match wins
        """
        self._resolver = resolver
        self.excluded = excluded
        self.tool_name = tool_name
        self.tool_version = tool_version
        self.rules = list(rules or [])

    @property
    def resolver(self) -> PlatformResolver:
        if self._resolver is None:
            self._resolver = PlatformResolver()
        return self._resolver

    def sync_platform(self, identifier: str, options: SyncOptions) -> SyncReport:
        """Resolve a platform identifier and sync from the directory it names.

        Raises:
            SyncError: If resolution or synchronization fails
        """
        try:
            source = self.resolver.resolve(identifier)
        except Exception as e:
            raise SyncError(f"Synchronization failed: {e}", e) from e
        return self.sync(source.path, options.dest_root, options)

    def sync(self, source_root: Path | str, dest_root: Path | str, options: SyncOptions) -> SyncReport:
        """Copy source_root into dest_root and write the marker file.

        Copying is not transactional: on failure, whatever was already copied
        stays in place. Running again with overwrite off fills in the rest.

        Args:
            source_root: Game installation directory
            dest_root: Workspace directory to populate
            options: Patchline and overwrite settings

        Returns:
            SyncReport with counts of what was done

        Raises:
            SyncError: Wrapping the first error encountered
        """
        try:
            return self._sync(Path(source_root), Path(dest_root), options)
        except Exception as e:
            raise SyncError(f"Synchronization failed: {e}", e) from e

    def _sync(self, source_root: Path, dest_root: Path, options: SyncOptions) -> SyncReport:
        if not source_root.exists():
            raise SourceNotFound(normalize(source_root))
        if not source_root.is_dir():
            raise SourceNotADirectory(normalize(source_root))

        dest_root.mkdir(parents=True, exist_ok=True)

        report = SyncReport(source=source_root, destination=dest_root)

        if self.is_excluded(source_root):
            logger.info("Not copying %s: symbolic link or excluded directory name", source_root)
            report.excluded.append(".")
        else:
            self._copy_tree(source_root, dest_root, options, report)

        report.marker_path = self.write_marker(dest_root, options.patchline)
        logger.info("Synced %s to %s: %s", source_root, dest_root, report.summary())
        return report

    def is_excluded(self, directory: Path) -> bool:
        """Check whether a directory (and everything under it) is left out."""
        return directory.is_symlink() or directory.name in self.excluded

    def _copy_tree(
        self,
        source_root: Path,
        dest_root: Path,
        options: SyncOptions,
        report: SyncReport,
    ) -> None:
        default_rule = ShouldOverwriteWriteRule(options.overwrite)

        for dirpath, dirnames, filenames in os.walk(source_root, onerror=_raise):
            current = Path(dirpath)
            target_dir = dest_root / relative_path(source_root, current)
            target_dir.mkdir(parents=True, exist_ok=True)
            report.directories += 1

            # Prune in place so os.walk never descends into excluded subtrees
            kept = []
            for name in dirnames:
                child = current / name
                if self.is_excluded(child):
                    rel = relative_path(source_root, child).as_posix()
                    logger.debug("Skipping directory %s", rel)
                    report.excluded.append(rel)
                else:
                    kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                source_file = current / name
                if not source_file.is_file():
                    logger.debug("Skipping %s: not a regular file", source_file)
                    continue
                rel = relative_path(source_root, source_file)
                target = dest_root / rel
                rule = self.rule_for(rel, default_rule)
                if not rule.should_write(target):
                    logger.debug("Skipping %s because it already exists.", target)
                    report.files_skipped += 1
                    continue
                error = rule.write(source_file, target)
                if error is not None:
                    raise error
                report.files_copied += 1

    def rule_for(self, rel: Path, default: WriteRule) -> WriteRule:
        """Pick the first configured rule matching a relative path, else default."""
        for rule in self.rules:
            if rule.matches(rel):
                return rule
        return default

    def marker_text(self, patchline: str) -> str:
        return f"{patchline} - [{self.tool_name} {self.tool_version}]"

    def write_marker(self, dest_root: Path, patchline: str) -> Path:
        """Write patchline.txt, replacing any previous contents."""
        marker = dest_root / MARKER_FILENAME
        marker.write_text(self.marker_text(patchline), encoding="utf-8")
        logger.debug("Wrote %s", marker)
        return marker
