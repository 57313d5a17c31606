"""Service record and configuration models."""
from .config import ServiceConfig
from .service import Service, ContainerRef, ServiceStatus, DEFAULT_TAG

__all__ = ["Service", "ContainerRef", "ServiceStatus", "ServiceConfig", "DEFAULT_TAG"]
