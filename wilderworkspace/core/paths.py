"""Path-safety helpers shared by the workspace tools."""

import os
from pathlib import Path


class InvalidRelativePath(ValueError):
    """Raised when a path expected to be nested under a parent is not."""

    def __init__(self, parent: Path, child: Path) -> None:
        super().__init__(f"Child path {child} is not a subpath of {parent}")
        self.parent = parent
        self.child = child


def normalize(path: Path | str) -> Path:
    """Make a path absolute and collapse '.' and '..' without touching symlinks."""
    return Path(os.path.normpath(os.path.abspath(path)))


def relative_path(parent: Path | str, child: Path | str) -> Path:
    """Return child relative to parent.

    Raises:
        InvalidRelativePath: If child does not live under parent
    """
    parent_abs = normalize(parent)
    child_abs = normalize(child)
    try:
        return child_abs.relative_to(parent_abs)
    except ValueError:
        raise InvalidRelativePath(parent_abs, child_abs) from None
