import datetime as dt

from loguru import logger
from sqlalchemy import Date, DateTime, Index, String, Text, delete, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from salonbook.domain.exceptions import SlotAlreadyBookedError, StoreUnavailableError
from salonbook.domain.models import Appointment, BookedEntry, BookingStatus

_ACTIVE_SLOT = text("status != 'cancelled'")


class Base(DeclarativeBase):
    pass


class AppointmentRow(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # At most one non-cancelled appointment per (date, time).
        Index(
            "uq_appointments_active_slot",
            "date",
            "time",
            unique=True,
            sqlite_where=_ACTIVE_SLOT,
            postgresql_where=_ACTIVE_SLOT,
        ),
        Index("ix_appointments_starts_at", "starts_at"),
        Index("ix_appointments_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    phone_number: Mapped[str] = mapped_column(String(15))
    email: Mapped[str] = mapped_column(String(320))
    date: Mapped[dt.date] = mapped_column(Date)
    time: Mapped[str] = mapped_column(String(5))
    # Stored as naive UTC so comparisons behave the same on every backend.
    starts_at: Mapped[dt.datetime] = mapped_column(DateTime)
    status: Mapped[str] = mapped_column(String(16), default=BookingStatus.PENDING.value)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime)


def _to_naive_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        raise ValueError("Expected an aware datetime")
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def _from_naive_utc(value: dt.datetime) -> dt.datetime:
    return value.replace(tzinfo=dt.timezone.utc)


def _to_model(row: AppointmentRow) -> Appointment:
    return Appointment(
        appointment_id=row.id,
        name=row.name,
        phone_number=row.phone_number,
        email=row.email,
        date=row.date,
        time=row.time,
        starts_at=_from_naive_utc(row.starts_at),
        status=BookingStatus(row.status),
        notes=row.notes,
        created_at=_from_naive_utc(row.created_at),
        updated_at=_from_naive_utc(row.updated_at),
    )


class SqlAppointmentStore:
    """Appointment store backed by SQLAlchemy's asyncio extension.

    Double-booking is prevented by a partial unique index on ``(date, time)``
    covering non-cancelled rows; the database rejects the losing insert of
    any race and the violation is reported as ``SlotAlreadyBookedError``.
    """

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self._engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False)

    async def create_schema(self) -> None:
        """Create the appointments table and its indexes if missing."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Schema creation failed: {exc}") from exc
        logger.info("Appointment schema ready")

    async def list_entries(self, start: dt.datetime, end: dt.datetime) -> list[BookedEntry]:
        stmt = select(AppointmentRow.time, AppointmentRow.status).where(
            AppointmentRow.starts_at >= _to_naive_utc(start),
            AppointmentRow.starts_at < _to_naive_utc(end),
        )
        try:
            async with self._sessions() as session:
                rows = (await session.execute(stmt)).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Slot query failed: {exc}") from exc
        return [BookedEntry(time=time, status=BookingStatus(status)) for time, status in rows]

    async def insert_if_free(self, appointment: Appointment) -> Appointment:
        row = AppointmentRow(
            id=appointment.appointment_id,
            name=appointment.name,
            phone_number=appointment.phone_number,
            email=appointment.email,
            date=appointment.date,
            time=appointment.time,
            starts_at=_to_naive_utc(appointment.starts_at),
            status=appointment.status.value,
            notes=appointment.notes,
            created_at=_to_naive_utc(appointment.created_at),
            updated_at=_to_naive_utc(appointment.updated_at),
        )
        try:
            async with self._sessions() as session, session.begin():
                session.add(row)
        except IntegrityError as exc:
            raise SlotAlreadyBookedError(appointment.date, appointment.time) from exc
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Appointment insert failed: {exc}") from exc
        return appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        try:
            async with self._sessions() as session:
                row = await session.get(AppointmentRow, appointment_id)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Appointment lookup failed: {exc}") from exc
        return _to_model(row) if row else None

    async def list_appointments(
        self,
        status: BookingStatus | None = None,
        start: dt.datetime | None = None,
        end: dt.datetime | None = None,
    ) -> list[Appointment]:
        stmt = select(AppointmentRow)
        if status is not None:
            stmt = stmt.where(AppointmentRow.status == status.value)
        if start is not None:
            stmt = stmt.where(AppointmentRow.starts_at >= _to_naive_utc(start))
        if end is not None:
            stmt = stmt.where(AppointmentRow.starts_at < _to_naive_utc(end))
        stmt = stmt.order_by(AppointmentRow.starts_at, AppointmentRow.created_at)

        try:
            async with self._sessions() as session:
                rows = (await session.scalars(stmt)).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Appointment listing failed: {exc}") from exc
        return [_to_model(row) for row in rows]

    async def update(
        self,
        appointment_id: str,
        status: BookingStatus,
        notes: str | None,
        updated_at: dt.datetime,
    ) -> Appointment | None:
        try:
            async with self._sessions() as session, session.begin():
                row = await session.get(AppointmentRow, appointment_id)
                if row is None:
                    return None
                slot = (row.date, row.time)
                row.status = status.value
                row.notes = notes
                row.updated_at = _to_naive_utc(updated_at)
                await session.flush()
                result = _to_model(row)
        except IntegrityError as exc:
            # Only reachable when un-cancelling into a slot taken meanwhile.
            raise SlotAlreadyBookedError(*slot) from exc
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Appointment update failed: {exc}") from exc
        return result

    async def delete(self, appointment_id: str) -> bool:
        stmt = delete(AppointmentRow).where(AppointmentRow.id == appointment_id)
        try:
            async with self._sessions() as session, session.begin():
                result = await session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Appointment delete failed: {exc}") from exc
        return bool(result.rowcount)

    async def health_check(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as exc:
            logger.warning("Appointment store health check failed: {}", exc)
            return False

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Appointment store closed")
