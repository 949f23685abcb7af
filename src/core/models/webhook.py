"""Inbound webhook envelope and the JSON response returned to the provider."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TriggerEvent(str, Enum):
    BOOKING_CREATED = "BOOKING_CREATED"
    BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"
    GET_BOOKINGS = "GET_BOOKINGS"


class WebhookEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trigger_event: str = Field(..., alias="triggerEvent")
    payload: dict[str, Any] = {}


class WebhookResponse(BaseModel):
    status_code: int = Field(default=200, exclude=True)
    ok: bool
    error: str | None = None
    body: str | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
