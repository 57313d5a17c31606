"""Errors, settings, logging and collaborator wiring."""
from .errors import (
    LifecycleError,
    NotFound,
    DriverFailure,
    ContainerNotFound,
    StoreFailure,
    RecordNotFound,
)
from .settings import LifecycleSettings, get_settings
from .locks import KeyedLock
from .context import LifecycleContext, build_context

__all__ = [
    "LifecycleError",
    "NotFound",
    "DriverFailure",
    "ContainerNotFound",
    "StoreFailure",
    "RecordNotFound",
    "LifecycleSettings",
    "get_settings",
    "KeyedLock",
    "LifecycleContext",
    "build_context",
]
