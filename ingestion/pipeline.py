"""Ingestion pipeline: key check → normalize → resolve location → persist → maybe alert."""

from datetime import datetime, timezone
from typing import Any

from alerts.dispatcher import AlertDispatcher
from config import Settings, configure_logging
from errors import AuthError
from ingestion.location import resolve_location
from ingestion.schemas import EventRecord
from storage.events import EventStore


def utc_now_iso() -> str:
    """Server clock as ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T10:00:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class IngestionPipeline:
    """
    Wires together: ingestion key check → EventRecord → EventStore → AlertDispatcher.

    Alert dispatch is detached from the request: ``submit_event`` returns as
    soon as the record is on disk, whatever happens to the SMS.
    """

    def __init__(self, settings: Settings, store: EventStore, dispatcher: AlertDispatcher):
        self.log = configure_logging("ingestion", settings.log_level, settings.log_json)
        self._api_key = settings.api_key
        self._fallback = (settings.server_lat, settings.server_lng)
        self._store = store
        self._dispatcher = dispatcher

    def check_api_key(self, api_key: str | None):
        if self._api_key and api_key != self._api_key:
            self.log.warning("ingestion_key_rejected")
            raise AuthError("unauthorized")

    def normalize(self, payload: dict[str, Any] | None) -> EventRecord:
        data = dict(payload or {})
        location = resolve_location(data, *self._fallback)
        data.update(
            {
                "receivedAt": utc_now_iso(),
                "latitude": location.latitude,
                "longitude": location.longitude,
                "locationSource": location.source,
            }
        )
        return EventRecord.model_validate(data)

    async def submit_event(self, api_key: str | None, payload: dict[str, Any] | None) -> dict:
        self.check_api_key(api_key)

        record = self.normalize(payload)
        event = record.to_json()
        self.log.info(
            "event_received",
            event_type=event.get("event"),
            device_id=event.get("deviceId"),
            latitude=record.latitude,
            longitude=record.longitude,
            location_source=record.location_source,
        )
        await self._store.append(event)

        if record.is_fall:
            self._dispatcher.schedule(record)

        return {"status": "ok"}

    async def list_events(self) -> list[dict[str, Any]]:
        """Full stored sequence, oldest first. Callers must have passed the auth gate."""
        return await self._store.load_all()
