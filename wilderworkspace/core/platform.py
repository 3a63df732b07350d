"""Resolution of the game installation directory for a distribution platform.

A platform identifier is either the name of a storefront (steam, epic, ...)
whose default install location we know how to look up, or a literal path to
an installation. Unknown names are always treated as literal paths.
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from .. import GAME_NAME


logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """Raised when a known platform has no default install location for this OS."""

    def __init__(self, message: str, platform: str) -> None:
        super().__init__(message)
        self.platform = platform


class Platform(Enum):
    """Distribution channels the game is sold through."""

    STEAM = "steam"
    EPIC = "epic"
    ITCH = "itch"
    GOG = "gog"
    FILESYSTEM = "filesystem"  # the identifier is itself the path

    @classmethod
    def from_string(cls, value: str) -> "Platform":
        """Match a platform by name, case-insensitively.

        Anything that isn't a known platform name is assumed to be a path.
        """
        lowered = value.lower()
        for platform in cls:
            if platform.value == lowered:
                return platform
        return cls.FILESYSTEM


def current_os() -> str:
    """Return a short name for the running OS: windows, mac, linux or sys.platform."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "mac"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def steam_library_dir(os_name: str) -> Path:
    """Locate the default Steam 'steamapps' directory for an OS.

    Raises:
        ResolutionError: If we don't know where Steam lives on this OS
    """
    home = Path.home()
    if os_name == "windows":
        program_files = os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
        return Path(program_files) / "Steam" / "steamapps"
    if os_name == "mac":
        return home / "Library" / "Application Support" / "Steam" / "steamapps"
    if os_name == "linux":
        candidates = [
            home / ".steam" / "steam" / "steamapps",
            home / ".local" / "share" / "Steam" / "steamapps",
        ]
        for candidate in candidates:
            if candidate.is_dir():
                return candidate
        return candidates[0]
    raise ResolutionError(
        f"I don't know where the default install directory for {GAME_NAME} is for the "
        f"steam platform on {os_name}. Submit a pull request or input a raw path to the "
        "installation location.",
        platform=Platform.STEAM.value,
    )


Locator = Callable[[str], Path]


def _steam_install_dir(os_name: str) -> Path:
    return steam_library_dir(os_name) / "common" / GAME_NAME


def unknown_platform_location(platform: str) -> Locator:
    """Build a locator that always fails for a platform we have no lookup for."""

    def locate(os_name: str) -> Path:
        raise ResolutionError(
            f"I don't know where the default install directory for {GAME_NAME} is for the "
            f"{platform} platform. Submit a pull request or input a raw path to the "
            "installation location.",
            platform=platform,
        )

    return locate


LOCATORS: dict[Platform, Locator] = {
    Platform.STEAM: _steam_install_dir,
    Platform.EPIC: unknown_platform_location(Platform.EPIC.value),
    Platform.ITCH: unknown_platform_location(Platform.ITCH.value),
    Platform.GOG: unknown_platform_location(Platform.GOG.value),
}


@dataclass(frozen=True)
class ResolvedSource:
    """Where the game files will be copied from."""

    platform: Platform
    path: Path
    identifier: str

    @property
    def is_default_install(self) -> bool:
        return self.platform is not Platform.FILESYSTEM


class PlatformResolver:
    """Turns a platform identifier into a source directory."""

    def __init__(self, os_name: str | None = None) -> None:
        """Initialize the resolver.

        Args:
            os_name: OS to resolve default locations for (defaults to the running OS)
        """
        self.os_name = os_name or current_os()

    def resolve(self, identifier: str) -> ResolvedSource:
        """Resolve a platform name or literal path.

        Args:
            identifier: Platform name (any case) or a filesystem path

        Returns:
            ResolvedSource for the identifier

        Raises:
            ResolutionError: If the platform is known but has no default location here
        """
        platform = Platform.from_string(identifier)
        logger.info("Platform: %s", identifier)

        if platform is Platform.FILESYSTEM:
            path = Path(identifier)
            logger.info("Using custom %s install located at %s", GAME_NAME, path)
            return ResolvedSource(platform=platform, path=path, identifier=identifier)

        path = LOCATORS[platform](self.os_name)
        logger.info(
            "Using default %s install for %s, located at %s", platform.value, self.os_name, path
        )
        return ResolvedSource(platform=platform, path=path, identifier=identifier)
