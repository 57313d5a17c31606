"""
Per-key mutual exclusion for lifecycle operations.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class KeyedLock:
    """Table of re-entrant locks, one per service name.

    An entry lives only while some thread holds or waits on it, so the table
    does not grow with the number of services ever touched.
    """

    def __init__(self):
        self._lock = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._entries: Dict[str, List] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock:
            entry = self._entries.setdefault(key, [threading.RLock(), 0])
            entry[1] += 1

        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
