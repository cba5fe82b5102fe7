"""
Project - Loading local projects and resolving compiled packages.
"""

from .loader import ProjectLoader
from .model import Module, Project, ProjectKind
from .resolver import (
    BalaCacheResolver,
    PackageDescriptor,
    ResolutionResponse,
    ResolutionStatus,
    resolve_bala_path,
)

__all__ = [
    "BalaCacheResolver",
    "Module",
    "PackageDescriptor",
    "Project",
    "ProjectKind",
    "ProjectLoader",
    "ResolutionResponse",
    "ResolutionStatus",
    "resolve_bala_path",
]
