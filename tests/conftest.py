"""
Pytest configuration and shared fixtures for detourcfg tests.
"""

import logging

import pytest

from detourcfg.config.parameters import Parameter, ParameterRegistry
from detourcfg.config.settings import Settings
from detourcfg.config.store import ConfigurationStore

# Configure test logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


@pytest.fixture
def settings():
    """Library settings with defaults, independent of the process environment."""
    return Settings(
        max_detour_depth=32,
        strict_booleans=False,
        log_level="INFO",
        environment="development",
    )


@pytest.fixture
def registry():
    """Registry modelled on a small network service configuration."""
    registry = ParameterRegistry()
    registry.define("Host")
    registry.define("port", 8080)
    registry.define("admin.port", Parameter("admin.port.base"))
    registry.define("admin.port.base", 9090)
    registry.define("bind.address", registry.lookup("host"))
    registry.define("tls.enabled", False)
    registry.define("timeout.seconds", "2.5")
    registry.define("separator", ",")
    registry.define("peers")
    registry.define("log.level", "info")
    return registry


@pytest.fixture
def store(registry, settings):
    """Empty store bound to the shared registry."""
    return ConfigurationStore(registry, settings)


@pytest.fixture
def populated_store(store):
    """Store with a handful of explicit values."""
    store.assign("host", "db.internal")
    store.assign("port", 5432)
    store.assign("peers", ["10.0.0.1", "10.0.0.2", 7, True, None])
    return store


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Add default markers to tests based on location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
