import datetime as dt
from abc import ABC, abstractmethod

from salonbook.domain.models import (
    Appointment,
    AppointmentRequest,
    AppointmentUpdate,
    BookingStatus,
)


class AbstractBookingService(ABC):
    """Abstract base class for appointment booking operations."""

    @property
    @abstractmethod
    def timezone_name(self) -> str:
        """IANA name of the business timezone all dates are interpreted in."""

    @abstractmethod
    async def available_slots(self, date: dt.date) -> list[str]:
        """List the slot labels a customer can book on ``date``.

        Args:
            date: Civil date in the business timezone.

        Returns:
            Grid labels in ascending order. Empty if everything is taken or past.

        Raises:
            DateOutOfRangeError: If ``date`` is outside the booking window.
            StoreUnavailableError: If booked slots cannot be read.
        """

    @abstractmethod
    async def book(self, request: AppointmentRequest) -> Appointment:
        """Book a slot for a customer.

        Args:
            request: Customer details and the requested date and slot.

        Returns:
            The stored appointment, in ``pending`` status.

        Raises:
            InvalidSlotLabelError: If the time is not a grid label.
            DateOutOfRangeError: If the date is outside the booking window.
            SlotInPastError: If the slot has already started today.
            SlotAlreadyBookedError: If the slot is held by another appointment.
            StoreUnavailableError: If the store cannot be read or written.
        """

    @abstractmethod
    async def list_appointments(
        self, status: BookingStatus | None = None, date: dt.date | None = None
    ) -> list[Appointment]:
        """List appointments ordered by start time.

        Args:
            status: Only return appointments in this status.
            date: Only return appointments on this civil date.

        Raises:
            StoreUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    async def get_appointment(self, appointment_id: str) -> Appointment:
        """Fetch one appointment.

        Raises:
            AppointmentNotFoundError: If no appointment has this ID.
            StoreUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    async def update_appointment(
        self, appointment_id: str, update: AppointmentUpdate
    ) -> Appointment:
        """Change an appointment's status and notes, notifying the customer on status change.

        Raises:
            AppointmentNotFoundError: If no appointment has this ID.
            SlotAlreadyBookedError: If re-activating would double-book the slot.
            StoreUnavailableError: If the store cannot be read or written.
        """

    @abstractmethod
    async def delete_appointment(self, appointment_id: str) -> None:
        """Permanently remove an appointment.

        Raises:
            AppointmentNotFoundError: If no appointment has this ID.
            StoreUnavailableError: If the store cannot be written.
        """

    @abstractmethod
    async def start(self) -> None:
        """Prepare the backing store for requests."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backing store is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release resources held by this service."""
