"""
Errors raised by the connector service collaborators.

The service layer catches all of these at its strategy boundaries;
they never reach a caller of the public handlers.
"""

from pathlib import Path


class ConnectorServiceError(Exception):
    """Base class for connector service errors."""


class SettingsError(ConnectorServiceError):
    """Raised when Settings.toml cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid settings file '{path}': {reason}")


class RegistryError(ConnectorServiceError):
    """Raised when the registry cannot answer a request.

    Reasons:
    - Registry unreachable or timed out
    - Unexpected status code
    - Response body is not JSON
    """

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Central registry request failed: {reason}")


class ProjectLoadError(ConnectorServiceError):
    """Raised when no project can be loaded from a path."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load project at '{path}': {reason}")


class PackageResolutionError(ConnectorServiceError):
    """Raised when a package descriptor has no compiled package."""

    def __init__(self, descriptor: object):
        self.descriptor = descriptor
        super().__init__(f"No compiled package found for package '{descriptor}'")
