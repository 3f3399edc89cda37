"""JSON-array file persistence with per-store write serialization."""

import asyncio
import json
import os
import tempfile
from typing import Any

from config import configure_logging
from errors import StorageReadError


class JsonArrayStore:
    """
    Holds one JSON array on disk, rewritten in full on every mutation.

    Reads of a missing file yield an empty list. Reads of an unreadable or
    corrupt file are logged and also yield an empty list. Mutations go
    through ``_lock`` so read-modify-write cycles never interleave, and each
    write lands in a temp file that is renamed over the original.
    """

    def __init__(self, path: str, component: str, log_level: str = "INFO", json_logs: bool = True):
        self.path = path
        self.log = configure_logging(component, log_level, json_logs)
        self._lock = asyncio.Lock()

    # ─── Sync file access (runs in a worker thread) ─────────────────

    def _read_file(self) -> list[dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageReadError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StorageReadError(f"{self.path} does not hold a JSON array")
        return data

    def _write_file(self, records: list[dict[str, Any]]):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _load(self) -> list[dict[str, Any]]:
        try:
            return self._read_file()
        except StorageReadError as e:
            self.log.error("store_unreadable", path=self.path, error=str(e))
            return []

    # ─── Async API ──────────────────────────────────────────────────

    async def load_all(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._load)

    async def save_all(self, records: list[dict[str, Any]]):
        async with self._lock:
            await asyncio.to_thread(self._write_file, list(records))

    async def _append(self, record: dict[str, Any]) -> int:
        """Load, push, write back. Returns the new collection size."""
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            records.append(record)
            await asyncio.to_thread(self._write_file, records)
            return len(records)
