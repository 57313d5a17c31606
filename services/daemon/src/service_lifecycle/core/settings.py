"""
Configuration settings for the service lifecycle daemon.
"""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class LifecycleSettings(BaseSettings):
    """Lifecycle configuration loaded from environment variables."""

    # Storage paths
    state_dir: Path = Path("state")
    services_dir: Path = Path("services.d")

    # Container runtime
    docker_binary: str = "docker"
    restart_policy_name: str = "always"
    restart_policy_attempts: int = 10

    # Upper bound on create calls while a service still has no container
    create_attempts: int = 3

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "LIFECYCLE_"
        case_sensitive = False


@lru_cache()
def get_settings() -> LifecycleSettings:
    return LifecycleSettings()
