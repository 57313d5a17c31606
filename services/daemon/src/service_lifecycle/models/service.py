"""
Service record model.

The record is persisted as-is by the record store, so field names in the
serialized form (``uuid``, ``name``, ``tag``, ``container``, ``config``,
``status``) are part of the storage format and must not change.
"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .config import ServiceConfig

DEFAULT_TAG = "latest"


class ServiceStatus(str, Enum):
    """Lifecycle status, updated together with the container set."""
    PENDING = "pending"
    RUNNING = "running"
    STOPPED = "stopped"
    REMOVED = "removed"


class ContainerRef(BaseModel):
    """Handle on a runtime container backing a service."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""


class Service(BaseModel):
    """A named deployable unit and the containers believed to back it.

    An empty ``uuid`` means the service has not been created (or was not
    found); every operation except create rejects such a service.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    uuid: str = ""
    name: str = ""
    tag: str = DEFAULT_TAG
    containers: Dict[str, ContainerRef] = Field(default_factory=dict, alias="container")
    config: ServiceConfig = Field(default_factory=ServiceConfig)
    status: ServiceStatus = ServiceStatus.PENDING

    @property
    def exists(self) -> bool:
        return bool(self.uuid)

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted record layout."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Service":
        """Build a service from a persisted record; unknown fields are ignored."""
        data = dict(record)
        # Records written before explicit status tracking
        if data.get("status") is None:
            data.pop("status", None)
            data["status"] = (ServiceStatus.RUNNING if data.get("container")
                              else ServiceStatus.PENDING)
        if data.get("container") is None:
            data["container"] = {}
        return cls.model_validate(data)

    def load(self, other: "Service") -> None:
        """Replace this entity's state in place with another's."""
        self.uuid = other.uuid
        self.name = other.name
        self.tag = other.tag
        self.containers = dict(other.containers)
        self.config = other.config
        self.status = other.status
