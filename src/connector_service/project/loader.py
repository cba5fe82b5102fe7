"""
Project Loader - Finds and loads the project a path belongs to.

Lookup (walking up from the path):
- Directory with Ballerina.toml   -> build project
- Directory with package.json     -> bala (compiled package) project
- Existing standalone .bal file   -> single-file project

The path may point at a file that is not on disk yet (an unsaved
editor buffer); only its parent directories need to exist.
"""

import json
import tomllib
from pathlib import Path

import structlog

from ..config import DEFAULT_VERSION
from ..contracts import ProjectLoadError
from .model import Module, Project, ProjectKind

__all__ = ["ANON_ORG", "BALLERINA_TOML", "BALA_JSON", "ProjectLoader"]

logger = structlog.get_logger(__name__)

BALLERINA_TOML = "Ballerina.toml"
BALA_JSON = "package.json"
SOURCE_SUFFIX = ".bal"
MODULES_DIR = "modules"
ANON_ORG = "$anon"


class ProjectLoader:
    """Loads projects from disk.

    Implements ProjectLoaderProtocol. Nothing is cached: every call reads
    the project again.
    """

    def load(self, path: Path) -> Project:
        path = Path(path).expanduser().absolute()

        for directory in self._candidate_dirs(path):
            if (directory / BALLERINA_TOML).is_file():
                return self._load_build_project(directory)
            if (directory / BALA_JSON).is_file():
                return self._load_bala_project(directory)

        if path.is_file() and path.suffix == SOURCE_SUFFIX:
            return self._load_single_file(path)

        raise ProjectLoadError(path, "not part of a Ballerina project")

    @staticmethod
    def _candidate_dirs(path: Path) -> list[Path]:
        start = path if path.is_dir() else path.parent
        return [start, *start.parents]

    def _load_build_project(self, root: Path) -> Project:
        manifest = root / BALLERINA_TOML
        try:
            data = tomllib.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ProjectLoadError(root, f"invalid {BALLERINA_TOML}: {e}") from e

        package = data.get("package", {})
        if not isinstance(package, dict):
            raise ProjectLoadError(root, "[package] must be a table")

        org = str(package.get("org", ANON_ORG))
        name = str(package.get("name", root.name))
        version = str(package.get("version", DEFAULT_VERSION))

        modules = [Module(name, _sources(root))]
        modules_dir = root / MODULES_DIR
        if modules_dir.is_dir():
            for sub in sorted(p for p in modules_dir.iterdir() if p.is_dir()):
                modules.append(Module(f"{name}.{sub.name}", _sources(sub)))

        logger.debug("project_loaded", kind="build", root=str(root), modules=len(modules))
        return Project(ProjectKind.BUILD, root, org, name, version, tuple(modules))

    def _load_bala_project(self, root: Path) -> Project:
        descriptor = root / BALA_JSON
        try:
            data = json.loads(descriptor.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ProjectLoadError(root, f"invalid {BALA_JSON}: {e}") from e

        if not isinstance(data, dict) or "name" not in data:
            raise ProjectLoadError(root, f"{BALA_JSON} has no package name")

        org = str(data.get("organization", ANON_ORG))
        name = str(data["name"])
        version = str(data.get("version", DEFAULT_VERSION))

        # Bala modules live under modules/<full module name>/
        modules: list[Module] = []
        modules_dir = root / MODULES_DIR
        if modules_dir.is_dir():
            for sub in sorted(p for p in modules_dir.iterdir() if p.is_dir()):
                modules.append(Module(sub.name, _sources(sub)))
        modules.sort(key=lambda m: (m.name != name, m.name))

        logger.debug("project_loaded", kind="bala", root=str(root), modules=len(modules))
        return Project(ProjectKind.BALA, root, org, name, version, tuple(modules))

    def _load_single_file(self, path: Path) -> Project:
        name = path.stem
        module = Module(name, (path,))
        logger.debug("project_loaded", kind="single_file", path=str(path))
        return Project(ProjectKind.SINGLE_FILE, path.parent, ANON_ORG, name, DEFAULT_VERSION, (module,))


def _sources(directory: Path) -> tuple[Path, ...]:
    return tuple(sorted(p for p in directory.glob(f"*{SOURCE_SUFFIX}") if p.is_file()))
