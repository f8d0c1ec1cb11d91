import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class BookingStatus(str, Enum):
    """Possible states of an appointment."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def holds_slot(self) -> bool:
        return self is not BookingStatus.CANCELLED


class BookedEntry(BaseModel):
    """The (time, status) view of an appointment used for conflict checks."""

    model_config = ConfigDict(frozen=True)

    time: str
    status: BookingStatus


class AppointmentRequest(BaseModel):
    """A customer's request to book a slot.

    ``time`` is kept as the raw label; it is checked against the slot grid
    when the booking is committed so that an unknown label surfaces as
    ``InvalidSlotLabelError`` rather than a generic validation failure.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=50)
    phone_number: str = Field(min_length=10, max_length=15)
    email: EmailStr
    date: dt.date
    time: str
    notes: str | None = None

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class AppointmentUpdate(BaseModel):
    """An admin change to an appointment's status and notes."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    status: BookingStatus
    notes: str | None = None


class Appointment(BaseModel):
    """A stored appointment."""

    model_config = ConfigDict(frozen=True)

    appointment_id: str
    name: str
    phone_number: str
    email: str
    date: dt.date
    time: str
    starts_at: dt.datetime
    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    def as_entry(self) -> BookedEntry:
        return BookedEntry(time=self.time, status=self.status)
