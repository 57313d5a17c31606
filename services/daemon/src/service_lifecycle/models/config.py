"""
Service configuration model with Pydantic validation.

A ServiceConfig is resolved once when a service is created and then persisted
as part of the service record.
"""

import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

_MEMORY_RE = re.compile(r"^\s*(\d+)\s*([kmgt]?)(?:ib|i|b)?\s*$", re.IGNORECASE)
_MEMORY_UNITS = {"": 1, "k": 1024, "m": 1024 ** 2, "g": 1024 ** 3, "t": 1024 ** 4}


class ServiceConfig(BaseModel):
    """Image reference and runtime parameters for a service."""

    model_config = ConfigDict(extra="ignore")

    image: str = Field(default="", description="Container image reference")
    memory: int = Field(default=0, ge=0, description="Memory limit in bytes, 0 for none")
    ports: List[int] = Field(default_factory=list, description="Container ports to publish")
    volumes: List[str] = Field(default_factory=list, description="Binds as host:container[:mode]")
    env: Dict[str, str] = Field(default_factory=dict, description="Environment variables")

    @field_validator("image", mode="before")
    @classmethod
    def none_image_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("memory", mode="before")
    @classmethod
    def coerce_memory(cls, v):
        """Accept byte counts or docker-style sizes such as '512m' or '2Gi'."""
        if v is None:
            return 0
        if isinstance(v, str):
            match = _MEMORY_RE.match(v)
            if not match:
                raise ValueError(f"invalid memory size: {v!r}")
            number, unit = match.groups()
            return int(number) * _MEMORY_UNITS[unit.lower()]
        return v

    @field_validator("ports", mode="before")
    @classmethod
    def coerce_ports(cls, v):
        """Accept a single port or a list of '8080' / '8080/tcp' entries."""
        if v is None:
            return []
        if isinstance(v, (str, int)) and not isinstance(v, bool):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"ports must be a list, got {type(v).__name__}")
        return [int(p.split("/", 1)[0]) if isinstance(p, str) else p for p in v]

    @field_validator("volumes", mode="before")
    @classmethod
    def none_volumes_is_empty(cls, v):
        return [] if v is None else v

    @field_validator("env", mode="before")
    @classmethod
    def coerce_env(cls, v):
        """Accept a mapping or a list of KEY=VALUE strings."""
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            env = {}
            for item in v:
                key, _, value = str(item).partition("=")
                env[key] = value
            return env
        if not isinstance(v, dict):
            raise ValueError(f"env must be a mapping or a list, got {type(v).__name__}")
        return {str(k): "" if val is None else str(val) for k, val in v.items()}

    def env_list(self) -> List[str]:
        return [f"{k}={v}" for k, v in self.env.items()]
