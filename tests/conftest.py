"""Shared test fixtures."""

import pytest

from connector_service.config import ServiceConfig
from connector_service.generator import ConnectorGenerator
from connector_service.logging import ClientLogger
from connector_service.project import BalaCacheResolver, ProjectLoader
from connector_service.service import ConnectorContext, ConnectorService
from connector_service.settings import Settings
from helpers import FakeRegistry, write_bala, write_build_project


@pytest.fixture
def config(tmp_path):
    """Configuration pointing at a temporary Ballerina home."""
    return ServiceConfig(
        ballerina_home=tmp_path / ".ballerina",
        ballerina_version="2201.8.0",
    )


@pytest.fixture
def build_project(tmp_path):
    """A build project on disk."""
    return write_build_project(tmp_path / "project")


@pytest.fixture
def bala_cache(config):
    """Bala cache with wso2/twitter 1.0.0 and 1.10.0 pulled."""
    write_bala(config.bala_cache_dir, "wso2", "twitter", "1.0.0")
    write_bala(config.bala_cache_dir, "wso2", "twitter", "1.10.0", platform="java17")
    return config.bala_cache_dir


@pytest.fixture
def registry():
    """Fake registry with no connectors."""
    return FakeRegistry()


@pytest.fixture
def client_messages():
    """window/logMessage payloads forwarded to the client."""
    return []


@pytest.fixture
def context(config, registry, client_messages):
    """Real project collaborators, fake registry, debug client logging."""
    return ConnectorContext(
        config=config,
        settings_loader=Settings,
        client_factory=registry,
        project_loader=ProjectLoader(),
        generator=ConnectorGenerator(),
        resolver=BalaCacheResolver(config.bala_cache_dir),
        client_logger=ClientLogger(debug=True, sink=client_messages.append),
    )


@pytest.fixture
def service(context):
    return ConnectorService(context)
