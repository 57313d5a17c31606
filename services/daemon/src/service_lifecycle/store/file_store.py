"""
File-backed record store.

Writes one JSON document per service under ``<root>/<key>.json``.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from ..core.errors import RecordNotFound, StoreFailure
from .base import RecordStore

logger = logging.getLogger(__name__)


class FileRecordStore(RecordStore):
    """
    Minimal persistent store for service records.
    Each write replaces the whole file atomically.
    """

    def __init__(self, root: str | Path = "state") -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _file(self, key: str) -> Path:
        if not key or "/" in key or key in (".", ".."):
            raise StoreFailure(f"invalid record key: {key!r}")
        return self.root / f"{key}.json"

    def read(self, key: str) -> Dict[str, Any]:
        f = self._file(key)
        if not f.exists():
            raise RecordNotFound(key)
        try:
            return json.loads(f.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise StoreFailure(f"failed to read record {key}: {e}") from e

    def write(self, key: str, record: Dict[str, Any]) -> None:
        f = self._file(key)
        try:
            payload = json.dumps(record, indent=2)
        except (TypeError, ValueError) as e:
            raise StoreFailure(f"record {key} is not serializable: {e}") from e

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
            os.replace(tmp_path, f)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreFailure(f"failed to write record {key}: {e}") from e

    def remove(self, key: str) -> None:
        f = self.root / f"{key}.json"
        if "/" not in key and f.exists():
            self._unlink(f)
            return

        # Not a record key; look for a record carrying this uuid
        for candidate in self.root.glob("*.json"):
            try:
                data = json.loads(candidate.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                logger.warning("Skipping unreadable record %s", candidate.name)
                continue
            if isinstance(data, dict) and data.get("uuid") == key:
                self._unlink(candidate)
                return
        raise RecordNotFound(key)

    def _unlink(self, f: Path) -> None:
        try:
            f.unlink()
        except OSError as e:
            raise StoreFailure(f"failed to remove record {f.stem}: {e}") from e

    def list_keys(self) -> List[str]:
        if not self.root.exists():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))
