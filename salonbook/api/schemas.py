import datetime as dt

from pydantic import BaseModel

from salonbook.domain.models import Appointment


class SlotsResponse(BaseModel):
    date: dt.date
    timezone: str
    slots: list[str]


class AppointmentResponse(BaseModel):
    message: str | None = None
    appointment: Appointment


class AppointmentListResponse(BaseModel):
    appointments: list[Appointment]


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    store: bool


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx produced by a BookingError."""

    error: str
    message: str
