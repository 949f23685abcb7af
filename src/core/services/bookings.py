"""Booking lifecycle operations against the bookings table."""

import logging
from datetime import datetime, timezone

import httpx

from core.errors import ErrorCode, RemoteReadError, RemoteWriteError, TransportError
from core.models.booking import (
    BookingRow,
    BookingSearch,
    BookingStatus,
    BookingSummary,
    CancelBookingPayload,
    CreateBookingPayload,
    RescheduleBookingPayload,
)
from core.models.result import SyncResult
from core.services.data_api import DataApiClient, build_search_filter

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check_write(response: httpx.Response, action: str) -> SyncResult:
    if response.is_error:
        logger.error("Error %s booking (%d): %s", action, response.status_code, response.text)
        return SyncResult.failure(
            RemoteWriteError(f"Data API rejected {action}: {response.status_code} {response.text}")
        )
    return SyncResult.success(response)


def _update_status(client: DataApiClient, uid: str, changes: dict[str, str], action: str) -> SyncResult:
    try:
        response = client.update_rows("cal_event_id", uid, changes)
    except TransportError as e:
        return SyncResult.failure(e)

    result = _check_write(response, action)
    if not result.ok:
        return result

    # PATCH with return=representation answers with the updated rows
    if response.status_code == 200 and response.content.strip() == b"[]":
        logger.error("Error %s booking: no row with cal_event_id %s", action, uid)
        return SyncResult.failure(
            RemoteWriteError(f"No booking with cal_event_id {uid}", code=ErrorCode.BOOKING_NOT_FOUND)
        )

    logger.info("Successful DB write: %s %s", action, uid)
    return result


def create_booking(payload: CreateBookingPayload, client: DataApiClient) -> SyncResult:
    row = BookingRow.from_payload(payload, modified_at=_now())
    try:
        response = client.insert_row(row.model_dump(mode="json"))
    except TransportError as e:
        return SyncResult.failure(e)

    result = _check_write(response, "inserting")
    if result.ok:
        logger.info("Successful DB write: inserted %s", row.cal_event_id)
    return result


def search_bookings(criteria: BookingSearch, client: DataApiClient) -> SyncResult:
    """Find bookings matching any of the given criteria.

    Raises ValidationError, before any network call, when no criterion is set.
    """
    filter_expression = build_search_filter(criteria)

    try:
        response = client.select_rows(filter_expression)
    except TransportError as e:
        return SyncResult.failure(e)

    if response.is_error:
        logger.error("Error searching bookings (%d): %s", response.status_code, response.text)
        return SyncResult.failure(
            RemoteReadError(f"Data API rejected search: {response.status_code} {response.text}")
        )

    try:
        rows = response.json()
    except ValueError as e:
        logger.error("Error searching bookings: response is not JSON: %s", response.text)
        return SyncResult.failure(RemoteReadError(f"Search response is not JSON: {e}"))

    if not isinstance(rows, list):
        return SyncResult.failure(RemoteReadError(f"Unexpected search response: {rows!r}"))

    return SyncResult.success([BookingSummary.from_row(row) for row in rows])


def reschedule_booking(payload: RescheduleBookingPayload, client: DataApiClient) -> SyncResult:
    """Mark the original row RESCHEDULED under the new id, then insert the fresh booking.

    Both steps always run; the first failure is the operation's result.
    """
    previous = _update_status(
        client,
        payload.uid,
        {
            "status": BookingStatus.RESCHEDULED.value,
            "cal_event_id": payload.reschedule_uid,
            "modified_at": _now().isoformat(),
        },
        "rescheduling",
    )
    created = create_booking(payload, client)

    if not previous.ok:
        return previous
    return created


def cancel_booking(payload: CancelBookingPayload, client: DataApiClient) -> SyncResult:
    return _update_status(
        client,
        payload.uid,
        {
            "status": BookingStatus.CANCELLED.value,
            "modified_at": _now().isoformat(),
        },
        "cancelling",
    )
