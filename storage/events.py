"""Event store: append-only list of resolved event records, oldest first."""

from typing import Any

from storage.json_store import JsonArrayStore


class EventStore(JsonArrayStore):
    def __init__(self, path: str, log_level: str = "INFO", json_logs: bool = True):
        super().__init__(path, component="event-store", log_level=log_level, json_logs=json_logs)

    async def append(self, event: dict[str, Any]):
        count = await self._append(event)
        self.log.debug("event_persisted", path=self.path, total=count)
