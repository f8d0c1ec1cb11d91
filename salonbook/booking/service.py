import datetime as dt
import uuid
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger

from salonbook.booking.ports import AbstractBookingService
from salonbook.domain.exceptions import (
    AppointmentNotFoundError,
    BookingError,
    DateOutOfRangeError,
    StoreUnavailableError,
)
from salonbook.domain.models import (
    Appointment,
    AppointmentRequest,
    AppointmentUpdate,
    BookedEntry,
    BookingStatus,
)
from salonbook.notifications.notifier import AppointmentNotifier
from salonbook.scheduling.grid import parse_slot_label
from salonbook.scheduling.slots import SlotCalculator
from salonbook.store.ports import AppointmentStoreProtocol

T = TypeVar("T")


async def _store_call(action: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except BookingError:
        raise
    except Exception as exc:
        raise StoreUnavailableError(f"{action} failed: {exc}") from exc


class BookingService(AbstractBookingService):
    """Booking service that applies slot rules on top of an appointment store."""

    def __init__(
        self,
        store: AppointmentStoreProtocol,
        calculator: SlotCalculator,
        notifier: AppointmentNotifier,
        *,
        max_advance_days: int = 30,
    ) -> None:
        self._store = store
        self._calculator = calculator
        self._clock = calculator.clock
        self._notifier = notifier
        self._max_advance_days = max_advance_days

    @property
    def timezone_name(self) -> str:
        return self._clock.timezone_name

    def _check_window(self, date: dt.date) -> None:
        earliest = self._clock.today()
        latest = earliest + dt.timedelta(days=self._max_advance_days)
        if not earliest <= date <= latest:
            raise DateOutOfRangeError(date, earliest, latest)

    async def _booked_entries(self, date: dt.date) -> list[BookedEntry]:
        start, end = self._clock.to_storage_range(date)
        return await _store_call("Slot query", self._store.list_entries(start, end))

    async def available_slots(self, date: dt.date) -> list[str]:
        self._check_window(date)
        entries = await self._booked_entries(date)
        slots = self._calculator.available_slots(date, entries)
        logger.info("{} slot(s) available on {}", len(slots), date)
        return slots

    async def book(self, request: AppointmentRequest) -> Appointment:
        logger.info("Booking request: date={}, time={}", request.date, request.time)

        label = parse_slot_label(request.time)
        self._check_window(request.date)

        # The listing the customer chose from may be stale; re-check against
        # fresh entries. The store's conditional insert settles any race left.
        entries = await self._booked_entries(request.date)
        label = self._calculator.ensure_bookable(request.date, label, entries)

        now = self._clock.utcnow()
        appointment = Appointment(
            appointment_id=uuid.uuid4().hex,
            name=request.name,
            phone_number=request.phone_number,
            email=request.email,
            date=request.date,
            time=label,
            starts_at=self._clock.to_instant(request.date, label),
            status=BookingStatus.PENDING,
            notes=request.notes or None,
            created_at=now,
            updated_at=now,
        )
        stored = await _store_call("Appointment insert", self._store.insert_if_free(appointment))

        logger.info("Appointment created: id={}", stored.appointment_id)
        await self._notifier.booking_received(stored)
        return stored

    async def list_appointments(
        self, status: BookingStatus | None = None, date: dt.date | None = None
    ) -> list[Appointment]:
        start, end = self._clock.to_storage_range(date) if date else (None, None)
        return await _store_call(
            "Appointment listing", self._store.list_appointments(status, start, end)
        )

    async def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = await _store_call("Appointment lookup", self._store.get(appointment_id))
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    async def update_appointment(
        self, appointment_id: str, update: AppointmentUpdate
    ) -> Appointment:
        current = await self.get_appointment(appointment_id)

        # Omitted notes leave the existing ones in place; an explicit null clears them.
        notes = update.notes if "notes" in update.model_fields_set else current.notes

        updated = await _store_call(
            "Appointment update",
            self._store.update(appointment_id, update.status, notes, self._clock.utcnow()),
        )
        if updated is None:
            raise AppointmentNotFoundError(appointment_id)

        if updated.status != current.status:
            logger.info(
                "Appointment {} status changed: {} -> {}",
                appointment_id,
                current.status.value,
                updated.status.value,
            )
            await self._notifier.status_changed(updated)
        return updated

    async def delete_appointment(self, appointment_id: str) -> None:
        deleted = await _store_call("Appointment delete", self._store.delete(appointment_id))
        if not deleted:
            raise AppointmentNotFoundError(appointment_id)
        logger.info("Appointment deleted: id={}", appointment_id)

    async def start(self) -> None:
        await _store_call("Store start-up", self._store.create_schema())

    async def health_check(self) -> bool:
        return await self._store.health_check()

    async def close(self) -> None:
        await self._notifier.close()
        await self._store.close()
