from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BookingStatus(str, Enum):
    CREATED = "CREATED"
    RESCHEDULED = "RESCHEDULED"
    CANCELLED = "CANCELLED"


class Attendee(BaseModel):
    name: str | None = None
    email: str | None = None


class BookingEventPayload(BaseModel):
    """Fields every booking lifecycle event carries."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., min_length=1)


class CancelBookingPayload(BookingEventPayload):
    pass


class CreateBookingPayload(BookingEventPayload):
    type: str | None = None
    attendees: list[Attendee] = []
    start_time: datetime = Field(..., alias="startTime")
    end_time: datetime = Field(..., alias="endTime")
    status: str | None = None

    @property
    def first_attendee(self) -> Attendee:
        return self.attendees[0] if self.attendees else Attendee()


class RescheduleBookingPayload(CreateBookingPayload):
    reschedule_uid: str = Field(..., alias="rescheduleUid", min_length=1)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BookingRow(BaseModel):
    """One row of the bookings table, as inserted through the data API."""

    cal_event_id: str
    appointment_type: str | None = None
    patient_name: str | None = None
    patient_contact: str | None = None
    appointment_time: date
    status: str
    start_time: datetime
    end_time: datetime
    modified_at: datetime

    @classmethod
    def from_payload(cls, payload: CreateBookingPayload, modified_at: datetime) -> "BookingRow":
        attendee = payload.first_attendee
        return cls(
            cal_event_id=payload.uid,
            appointment_type=payload.type,
            patient_name=attendee.name,
            patient_contact=attendee.email,
            appointment_time=_as_utc(payload.start_time).date(),
            status=payload.status or BookingStatus.CREATED.value,
            start_time=payload.start_time,
            end_time=payload.end_time,
            modified_at=modified_at,
        )


class BookingSearch(BaseModel):
    """Search criteria for GET_BOOKINGS; any subset, matched disjunctively."""

    cal_event_id: str | None = Field(default=None, validation_alias=AliasChoices("uid", "cal_event_id"))
    patient_name: str | None = None
    patient_contact: str | None = None
    start_time: str | None = None
    end_time: str | None = None


class BookingSummary(BaseModel):
    uid: str | None
    appointment_type: str | None = None
    start_time: str | None = None
    end_time: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "BookingSummary":
        return cls(
            uid=row.get("cal_event_id"),
            appointment_type=row.get("appointment_type"),
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
        )
