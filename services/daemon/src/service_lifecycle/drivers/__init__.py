"""Container runtime drivers."""
from .base import (
    AuthConfig,
    ImageSpec,
    RestartPolicy,
    HostConfig,
    ContainerSpec,
    RuntimeDriver,
)
from .docker_cli import DockerCliDriver

__all__ = [
    "AuthConfig",
    "ImageSpec",
    "RestartPolicy",
    "HostConfig",
    "ContainerSpec",
    "RuntimeDriver",
    "DockerCliDriver",
]
