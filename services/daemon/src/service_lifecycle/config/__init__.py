"""Service definition lookup."""
from .resolver import ConfigResolver, YamlConfigResolver

__all__ = ["ConfigResolver", "YamlConfigResolver"]
