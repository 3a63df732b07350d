"""Access to files bundled inside the package."""

import logging
from importlib import resources
from pathlib import Path


logger = logging.getLogger(__name__)

RESOURCE_PACKAGE = "wilderworkspace.resources"


class MissingResourceError(LookupError):
    """Raised when a bundled resource can't be found."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find resource {name}")
        self.name = name


class Resource:
    """A bundled file that can be written into a directory once.

    Note that a resource is never overwritten: if the destination already
    exists, writing is skipped.
    """

    def __init__(self, name: str, dest_name: str | None = None) -> None:
        self.name = name
        self.dest_name = dest_name or name
        self._source = resources.files(RESOURCE_PACKAGE).joinpath(name)
        if not self._source.is_file():
            raise MissingResourceError(name)

    def read_bytes(self) -> bytes:
        return self._source.read_bytes()

    def read_text(self) -> str:
        return self._source.read_text(encoding="utf-8")

    def write(self, dest_dir: Path) -> bool:
        """Write the resource into dest_dir.

        Returns:
            True if the file was written, False if it already existed
        """
        dest = Path(dest_dir) / self.dest_name
        if dest.exists():
            logger.info("Resource already exists: %s", dest)
            return False
        logger.info("writing %s", dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.read_bytes())
        return True
