"""Record stores for service records."""
from .base import RecordStore
from .file_store import FileRecordStore
from .memory_store import InMemoryRecordStore

__all__ = ["RecordStore", "FileRecordStore", "InMemoryRecordStore"]
