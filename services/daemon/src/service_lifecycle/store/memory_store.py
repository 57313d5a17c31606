"""
In-memory record store.
"""

import copy
import threading
from typing import Any, Dict, List

from ..core.errors import RecordNotFound
from .base import RecordStore


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store; records are deep-copied in and out."""

    def __init__(self):
        self._lock = threading.RLock()
        self._records: Dict[str, Dict[str, Any]] = {}

    def read(self, key: str) -> Dict[str, Any]:
        with self._lock:
            if key not in self._records:
                raise RecordNotFound(key)
            return copy.deepcopy(self._records[key])

    def write(self, key: str, record: Dict[str, Any]) -> None:
        with self._lock:
            self._records[key] = copy.deepcopy(record)

    def remove(self, key: str) -> None:
        with self._lock:
            if key in self._records:
                del self._records[key]
                return
            for stored_key, record in self._records.items():
                if record.get("uuid") == key:
                    del self._records[stored_key]
                    return
            raise RecordNotFound(key)

    def list_keys(self) -> List[str]:
        with self._lock:
            return sorted(self._records)
