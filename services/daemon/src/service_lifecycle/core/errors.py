"""
Error taxonomy for lifecycle operations.

Collaborators raise these; the lifecycle manager logs and re-raises them
unchanged. ``ContainerNotFound`` and ``RecordNotFound`` are both a
``NotFound`` and a failure of the collaborator that reported them, so callers
can branch on either.
"""

from typing import Optional


class LifecycleError(Exception):
    """Base class for all service lifecycle errors."""


class NotFound(LifecycleError):
    """The service has no identity, or a collaborator reports absence."""


class DriverFailure(LifecycleError):
    """A container runtime operation failed."""


class ContainerNotFound(NotFound, DriverFailure):
    """The runtime has no container with the given identifier."""

    def __init__(self, message: str, container_id: Optional[str] = None):
        super().__init__(message)
        self.container_id = container_id


class StoreFailure(LifecycleError):
    """A record store read, write or delete failed."""


class RecordNotFound(NotFound, StoreFailure):
    """The record store has no entry for the key."""

    def __init__(self, key: str):
        super().__init__(f"record not found: {key}")
        self.key = key
