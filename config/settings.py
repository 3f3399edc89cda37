"""Centralized configuration using pydantic-settings. All values are env-configurable."""

import secrets

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True)

    # API
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: str = ""  # Empty disables the x-api-key check
    static_dir: str = "public"

    # Location fallback
    server_lat: float = 13.2180
    server_lng: float = 75.0060

    # Twilio
    twilio_sid: str = ""
    twilio_token: str = ""
    twilio_from: str = ""
    alert_to: str = ""

    # Auth
    jwt_secret: str = Field(default_factory=lambda: secrets.token_hex(32))
    token_ttl_sec: int = 3600
    bcrypt_rounds: int = 12

    # Storage
    events_file: str = "data/events.json"
    users_file: str = "data/users.json"

    # Monitoring
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def sms_configured(self) -> bool:
        return all((self.twilio_sid, self.twilio_token, self.twilio_from, self.alert_to))
