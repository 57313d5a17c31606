"""
Record store interface.

Records are plain JSON-compatible dictionaries keyed by service name. Since
services are destroyed by identity, ``remove`` also accepts the ``uuid`` of a
stored record in place of its key.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RecordStore(ABC):
    """Durable key/value persistence for service records.

    Implementations must be safe for concurrent use across different keys.
    """

    @abstractmethod
    def read(self, key: str) -> Dict[str, Any]:
        """Return the record for ``key``.

        Raises:
            RecordNotFound: no record is stored under ``key``
            StoreFailure: the record could not be read
        """

    @abstractmethod
    def write(self, key: str, record: Dict[str, Any]) -> None:
        """Create or replace the record for ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the record stored under ``key`` or carrying ``uuid == key``.

        Raises:
            RecordNotFound: no such record
        """

    @abstractmethod
    def list_keys(self) -> List[str]:
        """Return all stored keys."""
