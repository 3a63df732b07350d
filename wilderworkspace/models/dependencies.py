"""Versioned build dependencies shared by every workspace.

The tables are read once from the bundled dependencies.yaml and are immutable
afterwards. Project dependencies are what a mod needs at compile time and at
runtime; plugin dependencies are what the tool itself needs.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ..core.resources import Resource


DEPENDENCIES_RESOURCE = "dependencies.yaml"
LOADER_DIRNAME = "fabric"


class Placement(Enum):
    """Where a dependency has to live inside the workspace at runtime."""

    RUNTIME = "runtime"  # beside the game executable
    LOADER = "loader"  # in the loader's own directory

    def directory(self, dest_root: Path) -> Path:
        if self is Placement.LOADER:
            return Path(dest_root) / LOADER_DIRNAME
        return Path(dest_root)


@dataclass(frozen=True)
class Dependency:
    """A single group:artifact:version coordinate."""

    name: str
    group: str
    artifact: str
    version: str
    placement: Placement | None = None
    repo: str | None = None  # git repository the artifact is built from

    @property
    def module(self) -> str:
        return f"{self.group}:{self.artifact}"

    @property
    def notation(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"

    def __str__(self) -> str:
        return self.notation

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Dependency":
        """Create from dictionary."""
        placement = data.get("placement")
        return cls(
            name=data["name"],
            group=data["group"],
            artifact=data["artifact"],
            version=str(data["version"]),
            placement=Placement(placement) if placement else None,
            repo=data.get("repo"),
        )


@lru_cache(maxsize=None)
def _load_tables() -> dict[str, tuple[Dependency, ...]]:
    data = yaml.safe_load(Resource(DEPENDENCIES_RESOURCE).read_text()) or {}
    return {
        table: tuple(Dependency.from_dict(d) for d in data.get(table) or [])
        for table in ("project", "plugin")
    }


def project_dependencies(placement: Placement | None = None) -> tuple[Dependency, ...]:
    """Dependencies every mod project needs, optionally filtered by placement."""
    deps = _load_tables()["project"]
    if placement is None:
        return deps
    return tuple(d for d in deps if d.placement is placement)


def plugin_dependencies() -> tuple[Dependency, ...]:
    """Dependencies needed by the workspace tool itself."""
    return _load_tables()["plugin"]


def get_dependency(name: str) -> Dependency | None:
    """Look up a project or plugin dependency by name."""
    for dep in project_dependencies() + plugin_dependencies():
        if dep.name == name:
            return dep
    return None
