import asyncio
import datetime as dt

from salonbook.domain.exceptions import SlotAlreadyBookedError
from salonbook.domain.models import Appointment, BookedEntry, BookingStatus


class InMemoryAppointmentStore:
    """Process-local implementation of the AppointmentStoreProtocol.

    Used for local development and as the store in tests.  Conditional
    writes run under a single ``asyncio.Lock`` so that check-then-insert is
    atomic with respect to other coroutines.

    Set ``query_error``, ``write_error``, etc. to make the corresponding
    method raise on the next call.
    """

    def __init__(self) -> None:
        self.appointments: dict[str, Appointment] = {}
        self.closed: bool = False
        self.healthy: bool = True

        self.query_error: Exception | None = None
        self.write_error: Exception | None = None

        self._lock = asyncio.Lock()

    async def create_schema(self) -> None:
        return None

    def _holder(
        self, date: dt.date, time: str, exclude_id: str | None = None
    ) -> Appointment | None:
        for appt in self.appointments.values():
            if appt.appointment_id == exclude_id:
                continue
            if appt.date == date and appt.time == time and appt.status.holds_slot:
                return appt
        return None

    async def list_entries(self, start: dt.datetime, end: dt.datetime) -> list[BookedEntry]:
        if self.query_error:
            raise self.query_error
        return [
            appt.as_entry()
            for appt in self.appointments.values()
            if start <= appt.starts_at < end
        ]

    async def insert_if_free(self, appointment: Appointment) -> Appointment:
        if self.write_error:
            raise self.write_error
        async with self._lock:
            if self._holder(appointment.date, appointment.time):
                raise SlotAlreadyBookedError(appointment.date, appointment.time)
            self.appointments[appointment.appointment_id] = appointment
        return appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        if self.query_error:
            raise self.query_error
        return self.appointments.get(appointment_id)

    async def list_appointments(
        self,
        status: BookingStatus | None = None,
        start: dt.datetime | None = None,
        end: dt.datetime | None = None,
    ) -> list[Appointment]:
        if self.query_error:
            raise self.query_error
        result = [
            appt
            for appt in self.appointments.values()
            if (status is None or appt.status == status)
            and (start is None or appt.starts_at >= start)
            and (end is None or appt.starts_at < end)
        ]
        return sorted(result, key=lambda a: (a.starts_at, a.created_at))

    async def update(
        self,
        appointment_id: str,
        status: BookingStatus,
        notes: str | None,
        updated_at: dt.datetime,
    ) -> Appointment | None:
        if self.write_error:
            raise self.write_error
        async with self._lock:
            current = self.appointments.get(appointment_id)
            if current is None:
                return None
            if status.holds_slot and self._holder(current.date, current.time, appointment_id):
                raise SlotAlreadyBookedError(current.date, current.time)
            updated = current.model_copy(
                update={"status": status, "notes": notes, "updated_at": updated_at}
            )
            self.appointments[appointment_id] = updated
        return updated

    async def delete(self, appointment_id: str) -> bool:
        if self.write_error:
            raise self.write_error
        async with self._lock:
            return self.appointments.pop(appointment_id, None) is not None

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        self.closed = True
