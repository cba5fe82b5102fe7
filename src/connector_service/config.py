"""
Centralized configuration for the connector service.

Configuration sources (priority order):
1. Environment variables (CONNECTOR_SERVICE_*)
2. Default values

Environment variables:
- CONNECTOR_SERVICE_HOST: Bind address (default: 127.0.0.1)
- CONNECTOR_SERVICE_PORT: Port number (default: 9300)
- CONNECTOR_SERVICE_LOG_LEVEL: Log level (default: INFO)
- CONNECTOR_SERVICE_LOG_JSON: Render logs as JSON (default: false)
- CONNECTOR_SERVICE_CLIENT_DEBUG: Forward errors to the client (default: false)
- CONNECTOR_SERVICE_BALLERINA_HOME: User home (default: ~/.ballerina)
- CONNECTOR_SERVICE_BALLERINA_VERSION: Compiler version sent to central
- CONNECTOR_SERVICE_REGISTRY_TIMEOUT: Registry timeout in seconds (default: 30)

The registry itself is picked with the platform's own flags,
BALLERINA_DEV_CENTRAL and BALLERINA_STAGE_CENTRAL.
"""

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "DEFAULT_BALLERINA_HOME",
    "DEFAULT_VERSION",
    "SUPPORTED_PLATFORM",
    "ServiceConfig",
    "config",
    "remote_repo_url",
]

DEFAULT_BALLERINA_HOME = Path.home() / ".ballerina"

# Stand-in for an empty package version
DEFAULT_VERSION = "0.0.0"

SUPPORTED_PLATFORM = "any"

CENTRAL_URL = "https://api.central.ballerina.io/2.0/registry"
DEV_CENTRAL_URL = "https://api.dev-central.ballerina.io/2.0/registry"
STAGE_CENTRAL_URL = "https://api.staging-central.ballerina.io/2.0/registry"


def _get_env(key: str, default: str) -> str:
    """Get environment variable with CONNECTOR_SERVICE_ prefix."""
    return os.environ.get(f"CONNECTOR_SERVICE_{key}", default)


def _get_env_int(key: str, default: int) -> int:
    """Get integer environment variable."""
    return int(_get_env(key, str(default)))


def _get_env_float(key: str, default: float) -> float:
    """Get float environment variable."""
    return float(_get_env(key, str(default)))


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(f"CONNECTOR_SERVICE_{key}")
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def _get_env_path(key: str, default: Path) -> Path:
    """Get path environment variable."""
    val = os.environ.get(f"CONNECTOR_SERVICE_{key}")
    return Path(val).expanduser() if val else default


def remote_repo_url() -> str:
    """Registry URL, honouring the dev/staging switches."""
    if os.environ.get("BALLERINA_DEV_CENTRAL", "").lower() == "true":
        return DEV_CENTRAL_URL
    if os.environ.get("BALLERINA_STAGE_CENTRAL", "").lower() == "true":
        return STAGE_CENTRAL_URL
    return CENTRAL_URL


@dataclass(frozen=True)
class ServiceConfig:
    """Immutable service configuration."""

    host: str = _get_env("HOST", "127.0.0.1")
    port: int = _get_env_int("PORT", 9300)
    log_level: str = _get_env("LOG_LEVEL", "INFO")
    log_json: bool = _get_env_bool("LOG_JSON", False)

    # Mirror errors to the editor as log messages
    client_debug: bool = _get_env_bool("CLIENT_DEBUG", False)

    ballerina_home: Path = _get_env_path("BALLERINA_HOME", DEFAULT_BALLERINA_HOME)
    ballerina_version: str = _get_env("BALLERINA_VERSION", "2201.8.0")

    registry_timeout: float = _get_env_float("REGISTRY_TIMEOUT", 30.0)

    @property
    def settings_file(self) -> Path:
        """User Settings.toml (central token, proxy)."""
        return self.ballerina_home / "Settings.toml"

    @property
    def bala_cache_dir(self) -> Path:
        """Local cache of compiled packages pulled from central."""
        return self.ballerina_home / "repositories" / "central.ballerina.io" / "bala"


# Global singleton
config = ServiceConfig()
