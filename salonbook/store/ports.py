import datetime as dt
from typing import Protocol

from salonbook.domain.models import Appointment, BookedEntry, BookingStatus


class AppointmentStoreProtocol(Protocol):
    """Persistence interface for appointment records.

    All datetimes crossing this boundary are aware UTC instants. Ranges are
    half-open: ``start <= starts_at < end``.
    """

    async def create_schema(self) -> None:
        """Prepare storage for use. Safe to call more than once."""
        ...

    async def list_entries(self, start: dt.datetime, end: dt.datetime) -> list[BookedEntry]:
        """Return the (time, status) of every appointment starting in the range."""
        ...

    async def insert_if_free(self, appointment: Appointment) -> Appointment:
        """Insert ``appointment`` unless a non-cancelled one holds the same slot.

        The check and the insert happen as one atomic operation.

        Raises:
            SlotAlreadyBookedError: If the (date, time) pair is already held.
            StoreUnavailableError: If the store cannot be written.
        """
        ...

    async def get(self, appointment_id: str) -> Appointment | None:
        """Fetch a single appointment."""
        ...

    async def list_appointments(
        self,
        status: BookingStatus | None = None,
        start: dt.datetime | None = None,
        end: dt.datetime | None = None,
    ) -> list[Appointment]:
        """List appointments ordered by start time, optionally filtered."""
        ...

    async def update(
        self,
        appointment_id: str,
        status: BookingStatus,
        notes: str | None,
        updated_at: dt.datetime,
    ) -> Appointment | None:
        """Update status and notes; ``None`` if the appointment does not exist.

        Raises:
            SlotAlreadyBookedError: If un-cancelling would double-book the slot.
        """
        ...

    async def delete(self, appointment_id: str) -> bool:
        """Remove an appointment. Returns False if it did not exist."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def close(self) -> None:
        """Release resources."""
        ...
