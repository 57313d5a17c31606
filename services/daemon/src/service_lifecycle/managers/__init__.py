"""Service lifecycle management."""
from .lifecycle import ServiceLifecycleManager

__all__ = ["ServiceLifecycleManager"]
