"""Per-file write policies used when copying game files into the workspace."""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)


def atomic_copy(source: Path, dest: Path) -> None:
    """Copy source over dest so readers see either the old file or the new one.

    The data goes to a temporary file next to dest which is then renamed into
    place. Permission bits are carried over.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out, open(source, "rb") as src:
            shutil.copyfileobj(src, out)
        shutil.copymode(source, tmp_path)
        os.replace(tmp_path, dest)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class WriteRule:
    """Pairs a filename pattern with a way of writing matching files."""

    def __init__(self, pattern: str) -> None:
        self.pattern = re.compile(pattern)

    def matches(self, path: Path | str) -> bool:
        """Check whether a (relative) path is governed by this rule."""
        return self.pattern.fullmatch(Path(path).as_posix()) is not None

    def should_write(self, dest: Path) -> bool:
        return True

    def write(self, source: Path, dest: Path) -> Exception | None:
        """Write source to dest.

        Returns:
            The failure, or None if the write succeeded or was skipped
        """
        raise NotImplementedError


class ShouldOverwriteWriteRule(WriteRule):
    """Copies a file unless it already exists and overwriting is off."""

    def __init__(self, should_overwrite: bool, pattern: str = ".*") -> None:
        super().__init__(pattern)
        self.should_overwrite = should_overwrite

    def should_write(self, dest: Path) -> bool:
        return self.should_overwrite or not dest.exists()

    def write(self, source: Path, dest: Path) -> Exception | None:
        if not self.should_write(dest):
            logger.debug("Skipping %s because it already exists.", dest)
            return None
        try:
            logger.debug("Writing %s", dest)
            atomic_copy(source, dest)
        except OSError as e:
            return e
        return None
