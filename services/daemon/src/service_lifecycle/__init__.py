"""
Service lifecycle management.

Tracks named, versioned services backed by runtime containers and drives them
through create, pull, start, stop, restart, remove and destroy.
"""

from .managers import ServiceLifecycleManager
from .models import Service, ServiceConfig, ServiceStatus, ContainerRef
from .core import LifecycleContext, build_context

__all__ = [
    "ServiceLifecycleManager",
    "Service",
    "ServiceConfig",
    "ServiceStatus",
    "ContainerRef",
    "LifecycleContext",
    "build_context",
]
