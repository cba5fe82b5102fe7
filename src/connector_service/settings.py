"""
Settings Loader - Reads the user's Ballerina Settings.toml.

Only the parts the registry client needs are read:

    [central]
    accesstoken = "..."

    [proxy]
    host = "proxy.example.com"
    port = 3128
    username = ""
    password = ""

The file is re-read on every call so edits are picked up without a
restart.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

import structlog

from .contracts import SettingsError

__all__ = ["ACCESS_TOKEN_ENV", "CentralSettings", "Proxy", "Settings", "access_token", "read_settings"]

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_ENV = "BALLERINA_CENTRAL_ACCESS_TOKEN"


@dataclass(frozen=True)
class Proxy:
    """HTTP proxy settings."""

    host: str = ""
    port: int = 0
    username: str = ""
    password: str = ""

    @property
    def url(self) -> str | None:
        """Proxy URL for httpx, or None when no proxy is configured."""
        if not self.host:
            return None

        auth = ""
        if self.username:
            auth = quote(self.username, safe="")
            if self.password:
                auth += ":" + quote(self.password, safe="")
            auth += "@"

        port = f":{self.port}" if self.port else ""
        return f"http://{auth}{self.host}{port}"


@dataclass(frozen=True)
class CentralSettings:
    """[central] table."""

    access_token: str = ""


@dataclass(frozen=True)
class Settings:
    """Parsed Settings.toml."""

    central: CentralSettings = field(default_factory=CentralSettings)
    proxy: Proxy = field(default_factory=Proxy)


def read_settings(path: Path) -> Settings:
    """Read Settings.toml.

    Args:
        path: Settings file location

    Returns:
        Parsed settings; defaults if the file does not exist

    Raises:
        SettingsError: If the file exists but cannot be parsed
    """
    if not path.exists():
        logger.debug("settings_missing", path=str(path))
        return Settings()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(path, str(e)) from e

    central = data.get("central", {})
    proxy = data.get("proxy", {})
    if not isinstance(central, dict) or not isinstance(proxy, dict):
        raise SettingsError(path, "[central] and [proxy] must be tables")

    try:
        port = int(proxy.get("port", 0) or 0)
    except (TypeError, ValueError) as e:
        raise SettingsError(path, f"invalid proxy port: {proxy.get('port')!r}") from e

    return Settings(
        central=CentralSettings(access_token=str(central.get("accesstoken", ""))),
        proxy=Proxy(
            host=str(proxy.get("host", "")),
            port=port,
            username=str(proxy.get("username", "")),
            password=str(proxy.get("password", "")),
        ),
    )


def access_token(settings: Settings) -> str | None:
    """Access token for central; the environment wins over Settings.toml."""
    token = os.environ.get(ACCESS_TOKEN_ENV) or settings.central.access_token
    return token or None
