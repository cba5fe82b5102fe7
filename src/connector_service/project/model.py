"""
Project model - What a loaded Ballerina project looks like to the generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = ["Module", "Project", "ProjectKind"]


class ProjectKind(Enum):
    """How the project was found on disk."""

    BUILD = "build"
    SINGLE_FILE = "single_file"
    BALA = "bala"


@dataclass(frozen=True)
class Module:
    """A module and its source files (sorted by name)."""

    name: str
    source_files: tuple[Path, ...] = ()


@dataclass(frozen=True)
class Project:
    """A loaded project.

    Modules are ordered default module first, then submodules by name.
    """

    kind: ProjectKind
    source_root: Path
    org: str
    name: str
    version: str
    modules: tuple[Module, ...] = field(default_factory=tuple)

    @property
    def default_module(self) -> Module | None:
        return self.modules[0] if self.modules else None
