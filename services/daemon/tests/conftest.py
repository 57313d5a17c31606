"""
Pytest configuration and shared fixtures for lifecycle daemon tests.

Provides a lifecycle manager wired to an in-memory record store, a mocked
runtime driver and a mocked config resolver.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to path so tests can import modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from service_lifecycle.config import ConfigResolver  # noqa: E402
from service_lifecycle.core import LifecycleContext, LifecycleSettings  # noqa: E402
from service_lifecycle.drivers import RuntimeDriver  # noqa: E402
from service_lifecycle.managers import ServiceLifecycleManager  # noqa: E402
from service_lifecycle.models import ServiceConfig  # noqa: E402
from service_lifecycle.store import InMemoryRecordStore  # noqa: E402


@pytest.fixture
def service_configs():
    """Service definitions known to the mocked resolver."""
    return {
        "web": ServiceConfig(
            image="nginx:1.25",
            memory="256m",
            ports=[80],
            volumes=["/srv/www:/usr/share/nginx/html:ro"],
            env={"TZ": "UTC"},
        ),
        "db": ServiceConfig(image="postgres:16", ports=[5432]),
        "broken": ServiceConfig(image=""),
    }


@pytest.fixture
def config_resolver(service_configs):
    """Resolver returning an empty config for unknown names."""
    mock = Mock(spec=ConfigResolver)
    mock.resolve.side_effect = lambda name: service_configs.get(name, ServiceConfig()).model_copy(deep=True)
    return mock


@pytest.fixture
def record_store():
    """In-memory store wrapped so calls can be asserted."""
    return Mock(wraps=InMemoryRecordStore())


@pytest.fixture
def runtime_driver():
    """Mock runtime driver"""
    mock = Mock(spec=RuntimeDriver)
    mock.run_container.return_value = "c1"
    mock.inspect_container.return_value = [32768]
    return mock


@pytest.fixture
def settings(tmp_path):
    return LifecycleSettings(
        state_dir=tmp_path / "state",
        services_dir=tmp_path / "services.d",
        restart_policy_name="always",
        restart_policy_attempts=10,
        create_attempts=3,
    )


@pytest.fixture
def context(record_store, runtime_driver, config_resolver, settings):
    return LifecycleContext(
        store=record_store,
        driver=runtime_driver,
        config_resolver=config_resolver,
        settings=settings,
    )


@pytest.fixture
def manager(context):
    return ServiceLifecycleManager(context)
