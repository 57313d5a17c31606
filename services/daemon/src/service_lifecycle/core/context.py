"""
Collaborator bundle threaded through every lifecycle operation.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .locks import KeyedLock
from .logging_setup import setup_logging
from .settings import LifecycleSettings, get_settings

if TYPE_CHECKING:
    from ..config.resolver import ConfigResolver
    from ..drivers.base import RuntimeDriver
    from ..store.base import RecordStore


@dataclass
class LifecycleContext:
    """Record store, runtime driver, config resolver and logger for one manager."""
    store: "RecordStore"
    driver: "RuntimeDriver"
    config_resolver: "ConfigResolver"
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("service_lifecycle"))
    settings: LifecycleSettings = field(default_factory=get_settings)
    locks: KeyedLock = field(default_factory=KeyedLock)


def build_context(settings: Optional[LifecycleSettings] = None) -> LifecycleContext:
    """Configure logging and wire the file store, docker driver and YAML resolver from settings."""
    from ..config.resolver import YamlConfigResolver
    from ..drivers.docker_cli import DockerCliDriver
    from ..store.file_store import FileRecordStore

    settings = settings or get_settings()
    setup_logging(settings.log_level)
    return LifecycleContext(
        store=FileRecordStore(settings.state_dir),
        driver=DockerCliDriver(settings.docker_binary),
        config_resolver=YamlConfigResolver(settings.services_dir),
        settings=settings,
    )
