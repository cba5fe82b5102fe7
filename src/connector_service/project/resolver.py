"""
Package Resolver - Maps package descriptors to compiled packages on disk.

Compiled packages pulled from central are cached as extracted bala
directories:

    <bala cache>/<org>/<name>/<version>/<platform>/package.json

Resolution never downloads anything; a package that is not in the
cache is UNRESOLVED.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from ..contracts import PackageResolutionError, PackageResolverProtocol
from .loader import BALA_JSON

__all__ = [
    "BalaCacheResolver",
    "PackageDescriptor",
    "ResolutionResponse",
    "ResolutionStatus",
    "resolve_bala_path",
]

logger = structlog.get_logger(__name__)

# Searched in order
BALA_PLATFORMS = ("any", "java17", "java11")

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-(.+))?$")
_SEGMENT_RE = re.compile(r"^[\w.+-]+$")


@dataclass(frozen=True)
class PackageDescriptor:
    """Package identity used for resolution."""

    org: str
    name: str
    version: str = ""

    def __str__(self) -> str:
        return f"{self.org}/{self.name}:{self.version}"


class ResolutionStatus(Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ResolutionResponse:
    """Outcome of resolving one descriptor."""

    descriptor: PackageDescriptor
    status: ResolutionStatus
    path: Path | None = None


class BalaCacheResolver:
    """Resolves descriptors against the local bala cache.

    Implements PackageResolverProtocol. An empty version resolves to the
    highest version present in the cache.
    """

    def __init__(self, cache_dir: Path, platforms: tuple[str, ...] = BALA_PLATFORMS) -> None:
        self.cache_dir = Path(cache_dir)
        self.platforms = platforms

    def resolve_packages(self, descriptors: list[PackageDescriptor]) -> list[ResolutionResponse]:
        return [self._resolve(d) for d in descriptors]

    def _resolve(self, descriptor: PackageDescriptor) -> ResolutionResponse:
        if not _is_segment(descriptor.org) or not _is_segment(descriptor.name) or (
            descriptor.version and not _is_segment(descriptor.version)
        ):
            logger.warning("package_descriptor_rejected", package=str(descriptor))
            return ResolutionResponse(descriptor, ResolutionStatus.UNRESOLVED)

        package_dir = self.cache_dir / descriptor.org / descriptor.name
        version = descriptor.version or self._latest_version(package_dir)

        if version:
            for platform in self.platforms:
                bala_dir = package_dir / version / platform
                if (bala_dir / BALA_JSON).is_file():
                    logger.debug("package_resolved", package=str(descriptor), path=str(bala_dir))
                    return ResolutionResponse(descriptor, ResolutionStatus.RESOLVED, bala_dir)

        logger.debug("package_unresolved", package=str(descriptor))
        return ResolutionResponse(descriptor, ResolutionStatus.UNRESOLVED)

    @staticmethod
    def _latest_version(package_dir: Path) -> str | None:
        if not package_dir.is_dir():
            return None

        versions = [p.name for p in package_dir.iterdir() if p.is_dir() and _VERSION_RE.match(p.name)]
        if not versions:
            return None
        return max(versions, key=_version_key)


def _is_segment(value: str) -> bool:
    """A single cache directory name: no separators, no '.' or '..'."""
    return bool(_SEGMENT_RE.match(value)) and value not in (".", "..")


def _version_key(version: str) -> tuple:
    match = _VERSION_RE.match(version)
    assert match is not None
    major, minor, patch, pre = match.groups()
    # Releases sort above their pre-releases
    return (int(major), int(minor), int(patch), pre is None, pre or "")


def resolve_bala_path(
    resolver: PackageResolverProtocol, org: str, name: str, version: str
) -> Path:
    """Resolve (org, name, version) to the root of its compiled package.

    Only the first resolution response is consulted.

    Raises:
        PackageResolutionError: If the package is not fully resolved
    """
    descriptor = PackageDescriptor(org, name, version)
    responses = resolver.resolve_packages([descriptor])

    if responses:
        response = responses[0]
        if response.status is ResolutionStatus.RESOLVED and response.path is not None:
            return response.path

    raise PackageResolutionError(descriptor)
