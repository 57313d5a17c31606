"""
Runtime driver interface and the structures passed across it.

Drivers raise ``DriverFailure`` for every failed operation, and the more
specific ``ContainerNotFound`` when the runtime has no such container.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class AuthConfig:
    """Registry credentials; all empty means anonymous pull."""
    username: str = ""
    password: str = ""
    registry: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.username or self.password)


@dataclass
class ImageSpec:
    name: str
    auth: AuthConfig = field(default_factory=AuthConfig)


@dataclass
class RestartPolicy:
    name: str = "always"
    attempt: int = 10


@dataclass
class HostConfig:
    """Runtime launch parameters derived from a service configuration."""
    memory: int = 0
    ports: List[int] = field(default_factory=list)
    binds: List[str] = field(default_factory=list)
    privileged: bool = False
    restart_policy: RestartPolicy = field(default_factory=RestartPolicy)


@dataclass
class ContainerSpec:
    image: str
    memory: int = 0
    ports: List[int] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


class RuntimeDriver(ABC):
    """Abstraction over the container runtime.

    Implementations must be safe to call concurrently for different
    container identifiers.
    """

    @abstractmethod
    def pull_image(self, image: ImageSpec) -> None:
        """Pull an image so containers can be created from it."""

    @abstractmethod
    def run_container(self, spec: ContainerSpec, host_config: HostConfig) -> str:
        """Create and start a new container.

        Returns:
            The runtime-assigned container identifier
        """

    @abstractmethod
    def start_container(self, container_id: str, host_config: HostConfig) -> None:
        """Start an existing container."""

    @abstractmethod
    def stop_container(self, container_id: str) -> None:
        """Stop a running container."""

    @abstractmethod
    def restart_container(self, container_id: str, host_config: HostConfig) -> None:
        """Restart an existing container."""

    @abstractmethod
    def remove_container(self, container_id: str) -> None:
        """Remove a container.

        Raises:
            ContainerNotFound: the runtime has no such container
        """

    @abstractmethod
    def inspect_container(self, container_id: str) -> List[int]:
        """Return the host ports bound for a container, ordered by container port."""
