"""Routes a parsed webhook to its booking operation and shapes the response."""

import json
import logging
from typing import Any, TypeVar

import pydantic

from core.config import Config
from core.errors import USER_MESSAGES, BookingSyncError, ErrorCode, ValidationError
from core.models.booking import (
    BookingSearch,
    CancelBookingPayload,
    CreateBookingPayload,
    RescheduleBookingPayload,
)
from core.models.result import SyncResult
from core.models.webhook import TriggerEvent, WebhookEvent, WebhookResponse
from core.services.bookings import cancel_booking, create_booking, reschedule_booking, search_bookings
from core.services.data_api import DataApiClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

SEARCH_FAILURE_STATUS = 500


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate `data` against `model`, converting schema failures to ValidationError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ValidationError(f"Invalid {model.__name__}: {fields}") from e


def parse_webhook(raw_body: bytes) -> WebhookEvent:
    try:
        data = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(f"Body is not valid JSON: {e}", code=ErrorCode.INVALID_REQUEST) from e
    return parse_model(WebhookEvent, data)


def _failure_response(error: BookingSyncError | None, status_code: int) -> WebhookResponse:
    message = error.user_message if error else None
    return WebhookResponse(status_code=status_code, ok=False, error=message)


def _write_response(result: SyncResult, config: Config) -> WebhookResponse:
    if not result.ok:
        return _failure_response(result.error, config.write_failure_status)
    return WebhookResponse(status_code=200, ok=True)


def dispatch(event: WebhookEvent, client: DataApiClient, config: Config) -> WebhookResponse:
    """Run the operation named by the event's trigger and translate its result.

    Raises ValidationError when the payload does not fit the operation.
    """
    trigger = event.trigger_event
    logger.info("Dispatching %s", trigger)

    if trigger == TriggerEvent.BOOKING_CREATED:
        result = create_booking(parse_model(CreateBookingPayload, event.payload), client)
        return _write_response(result, config)

    if trigger == TriggerEvent.BOOKING_RESCHEDULED:
        result = reschedule_booking(parse_model(RescheduleBookingPayload, event.payload), client)
        return _write_response(result, config)

    if trigger == TriggerEvent.BOOKING_CANCELLED:
        result = cancel_booking(parse_model(CancelBookingPayload, event.payload), client)
        return _write_response(result, config)

    if trigger == TriggerEvent.GET_BOOKINGS:
        result = search_bookings(parse_model(BookingSearch, event.payload), client)
        if not result.ok:
            return _failure_response(result.error, SEARCH_FAILURE_STATUS)
        body = json.dumps([summary.model_dump() for summary in result.data])
        return WebhookResponse(status_code=200, ok=True, body=body)

    logger.warning("Unhandled trigger event %r", trigger)
    if config.reject_unknown_events:
        return WebhookResponse(
            status_code=422,
            ok=False,
            error=USER_MESSAGES[ErrorCode.UNSUPPORTED_EVENT],
        )
    return WebhookResponse(status_code=200, ok=True)
