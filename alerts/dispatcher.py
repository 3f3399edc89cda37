"""Alert dispatcher: sends an SMS through Twilio for critical events, fire-and-forget."""

import asyncio

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from config import Settings, configure_logging
from errors import NotificationError
from ingestion.schemas import EventRecord

MAP_URL = "https://www.google.com/maps?q={lat},{lng}"


def build_message(event: EventRecord) -> str:
    """Human-readable alert: device, time (device clock if sent), map link."""
    device = event.device_id or "unknown"
    when = event.timestamp or event.received_at
    map_link = MAP_URL.format(lat=event.latitude, lng=event.longitude)
    return f"ALERT: Device {device} reported a FALL!\nTime: {when}\nLocation: {map_link}"


class AlertDispatcher:
    """
    Wraps the Twilio REST client.

    A dispatcher without credentials is valid: every dispatch logs a warning
    and sends nothing. Send failures are logged and dropped, never retried.
    """

    def __init__(self, settings: Settings, client=None):
        self.log = configure_logging("alert-dispatcher", settings.log_level, settings.log_json)
        self._from = settings.twilio_from
        self._to = settings.alert_to
        self._pending: set[asyncio.Task] = set()

        if client is None and settings.sms_configured:
            client = Client(settings.twilio_sid, settings.twilio_token)
        self._client = client if settings.sms_configured else None

        if self._client is not None:
            self.log.info("sms_configured", sender=self._from, recipient=self._to)
        else:
            self.log.warning("sms_not_configured")

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _send(self, body: str) -> str:
        try:
            message = self._client.messages.create(body=body, from_=self._from, to=self._to)
        except (TwilioException, OSError) as e:
            raise NotificationError(str(e)) from e
        return message.sid

    async def dispatch(self, event: EventRecord) -> bool:
        """Send one alert. Returns True if the provider accepted the message."""
        if not self.configured:
            self.log.warning("sms_skipped_not_configured", device_id=event.device_id)
            return False

        body = build_message(event)
        try:
            sid = await asyncio.to_thread(self._send, body)
        except NotificationError as e:
            self.log.error("sms_send_failed", device_id=event.device_id, error=str(e))
            return False

        self.log.info("sms_sent", sid=sid, device_id=event.device_id)
        return True

    def schedule(self, event: EventRecord) -> asyncio.Task:
        """Start ``dispatch`` as a detached task; the caller never awaits it."""
        task = asyncio.create_task(self.dispatch(event))
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self._pending.discard(task)
        if task.cancelled():
            self.log.warning("sms_dispatch_cancelled")
        elif task.exception() is not None:
            exc = task.exception()
            self.log.error("sms_dispatch_crashed", error_type=type(exc).__name__, error=str(exc))

    async def drain(self):
        """Wait for in-flight dispatches, e.g. on shutdown."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    @property
    def pending_count(self) -> int:
        return len(self._pending)
