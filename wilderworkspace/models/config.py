"""Configuration models for the workspace tool.

Configuration comes from three places, highest precedence first:
- command-line flags
- the project's wilderworkspace.yaml
- the user's ~/.wilderWorkspace/config.properties
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


logger = logging.getLogger(__name__)

DEFAULT_PLATFORM = "steam"
DEFAULT_DEST_DIR = "bin"
DECOMP_DIRNAME = "decomp"
PROJECT_CONFIG_FILENAME = "wilderworkspace.yaml"
UNSPECIFIED_VERSION = "unspecified"


class ConfigError(ValueError):
    """Raised for a configuration file that can't be understood."""


def default_user_config_path() -> Path:
    return Path.home() / ".wilderWorkspace" / "config.properties"


def parse_properties(text: str) -> dict[str, str]:
    """Parse simple key=value properties text.

    Blank lines and lines starting with '#' or '!' are ignored. Keys and values
    are separated by the first '=' or ':'.
    """
    props: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        separators = [i for i in (line.find("="), line.find(":")) if i != -1]
        if not separators:
            props[line] = ""
            continue
        split_at = min(separators)
        props[line[:split_at].strip()] = line[split_at + 1:].strip()
    return props


@dataclass(frozen=True)
class UserConfig:
    """Per-user settings shared by every workspace."""

    platform: str = DEFAULT_PLATFORM
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> "UserConfig":
        """Load user settings, creating the file with defaults on first run."""
        path = path or default_user_config_path()
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"platform={DEFAULT_PLATFORM}\n", encoding="latin-1")
            logger.info("Created user config at %s", path)

        # Properties files are ISO-8859-1, like java.util.Properties expects
        props = parse_properties(path.read_text(encoding="latin-1"))
        return cls(platform=props.get("platform") or DEFAULT_PLATFORM, path=path)


@dataclass(frozen=True)
class WorkspaceConfig:
    """Project-level settings read from wilderworkspace.yaml."""

    project_dir: Path
    name: str
    version: str = UNSPECIFIED_VERSION
    platform: str | None = None
    dest_dir: str = DEFAULT_DEST_DIR
    patchline: str | None = None
    overwrite: bool = False

    @classmethod
    def from_dict(cls, project_dir: Path, data: dict[str, Any]) -> "WorkspaceConfig":
        """Create from dictionary."""
        project = data.get("project") or {}
        if not isinstance(project, dict):
            raise ConfigError("'project' must be a mapping with 'name' and 'version'")

        overwrite = data.get("overwrite", False)
        if not isinstance(overwrite, bool):
            raise ConfigError(f"'overwrite' must be true or false, got: {overwrite!r}")

        platform = data.get("platform")
        patchline = data.get("patchline")
        return cls(
            project_dir=project_dir,
            name=str(project.get("name") or project_dir.name),
            version=str(project.get("version") or UNSPECIFIED_VERSION),
            platform=str(platform) if platform is not None else None,
            dest_dir=str(data.get("dest_dir") or DEFAULT_DEST_DIR),
            patchline=str(patchline) if patchline is not None else None,
            overwrite=overwrite,
        )

    @classmethod
    def load(cls, project_dir: Path) -> "WorkspaceConfig":
        """Load wilderworkspace.yaml from a project directory.

        A project without a config file gets the defaults.
        """
        project_dir = Path(project_dir).absolute()
        config_path = project_dir / PROJECT_CONFIG_FILENAME
        if not config_path.exists():
            return cls(project_dir=project_dir, name=project_dir.name)

        try:
            with open(config_path, "rb") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        return cls.from_dict(project_dir, data)

    @property
    def default_patchline(self) -> str:
        return f"{self.name} {self.version}"


@dataclass(frozen=True)
class SyncOptions:
    """Settings for a single synchronization run."""

    dest_root: Path
    patchline: str
    overwrite: bool = False

    @property
    def decomp_dir(self) -> Path:
        return self.dest_root / DECOMP_DIRNAME

    @classmethod
    def from_config(
        cls,
        workspace: WorkspaceConfig,
        dest_dir: str | None = None,
        patchline: str | None = None,
        overwrite: bool | None = None,
    ) -> "SyncOptions":
        """Build options from project config, with explicit values taking precedence."""
        dest = Path(dest_dir or workspace.dest_dir)
        if not dest.is_absolute():
            dest = workspace.project_dir / dest
        return cls(
            dest_root=dest,
            patchline=patchline or workspace.patchline or workspace.default_patchline,
            overwrite=workspace.overwrite if overwrite is None else overwrite,
        )


def effective_platform(
    user: UserConfig,
    workspace: WorkspaceConfig,
    override: str | None = None,
) -> str:
    """Pick the platform identifier: flag, then project, then user config."""
    return override or workspace.platform or user.platform
