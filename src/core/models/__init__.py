"""
Pydantic models for the booking sync webhook.
"""

from core.models.booking import (
    Attendee,
    BookingRow,
    BookingSearch,
    BookingStatus,
    BookingSummary,
    CancelBookingPayload,
    CreateBookingPayload,
    RescheduleBookingPayload,
)
from core.models.result import SyncResult
from core.models.webhook import TriggerEvent, WebhookEvent, WebhookResponse

__all__ = [
    "Attendee",
    "BookingRow",
    "BookingSearch",
    "BookingStatus",
    "BookingSummary",
    "CancelBookingPayload",
    "CreateBookingPayload",
    "RescheduleBookingPayload",
    "SyncResult",
    "TriggerEvent",
    "WebhookEvent",
    "WebhookResponse",
]
