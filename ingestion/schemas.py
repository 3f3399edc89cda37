"""Canonical request and record shapes for the ingestion and auth endpoints."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LocationSource(str, Enum):
    DEVICE = "device"
    SERVER_DEFAULT = "server-default"


class EventRecord(BaseModel):
    """
    A persisted event. Client keys are kept verbatim as extra fields;
    the server-assigned fields always overwrite client values.
    """

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    received_at: str = Field(alias="receivedAt")
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)
    location_source: LocationSource = Field(alias="locationSource")

    # Recognized client keys, kept optional and untyped as sent
    event: Any = None
    device_id: Any = Field(default=None, alias="deviceId")
    timestamp: Any = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    @property
    def is_fall(self) -> bool:
        return str(self.event).lower() == "fall"


class SignupRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None
