"""
Service definition resolver.

Resolves a service name to the ServiceConfig it should be created with.
A name without a usable definition resolves to an empty config, which the
lifecycle manager reports as "service not found".
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..models import ServiceConfig

logger = logging.getLogger(__name__)


class ConfigResolver(ABC):
    """Source of service configurations."""

    @abstractmethod
    def resolve(self, name: str) -> ServiceConfig:
        """Return the configuration for ``name``, empty if none is defined."""


class YamlConfigResolver(ConfigResolver):
    """Handles loading of service definition YAML files.

    A service ``web`` is defined by ``<services_dir>/web.yaml`` (or ``.yml``)::

        image: nginx:1.25
        memory: 256m
        ports: [80]
        volumes: ["/srv/www:/usr/share/nginx/html:ro"]
        env:
          TZ: UTC
    """

    def __init__(self, services_dir: Union[str, Path]):
        """
        Args:
            services_dir: Directory holding one YAML file per service
        """
        self.services_dir = Path(services_dir)
        self._cache: Dict[str, ServiceConfig] = {}

    def resolve(self, name: str) -> ServiceConfig:
        if name in self._cache:
            return self._cache[name].model_copy(deep=True)

        path = self._resolve_path(name)
        if path is None:
            logger.warning("Service definition not found: %s", name)
            return ServiceConfig()

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("Failed to parse service definition %s: %s", path, e)
            return ServiceConfig()
        except OSError as e:
            logger.error("Failed to read service definition %s: %s", path, e)
            return ServiceConfig()

        if not isinstance(data, dict):
            logger.error("Service definition is empty or not a mapping: %s", path)
            return ServiceConfig()

        try:
            config = ServiceConfig.model_validate(data)
        except ValidationError as e:
            logger.error("Service definition validation failed for %s: %s", name, e)
            return ServiceConfig()

        self._cache[name] = config
        return config.model_copy(deep=True)

    def _resolve_path(self, name: str) -> Optional[Path]:
        if not name or "/" in name or name.startswith("."):
            return None
        for suffix in (".yaml", ".yml"):
            candidate = self.services_dir / f"{name}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def invalidate(self, name: Optional[str] = None) -> None:
        """Drop cached definitions so edited files are re-read."""
        if name is None:
            self._cache.clear()
        else:
            self._cache.pop(name, None)
