import datetime as dt
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from salonbook.api.schemas import (
    AppointmentListResponse,
    AppointmentResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    SlotsResponse,
)
from salonbook.booking.factory import build_booking_service
from salonbook.booking.ports import AbstractBookingService
from salonbook.config import AppConfig
from salonbook.domain.exceptions import (
    AppointmentNotFoundError,
    BookingError,
    DateOutOfRangeError,
    InvalidSlotLabelError,
    SlotAlreadyBookedError,
    SlotInPastError,
    StoreUnavailableError,
)
from salonbook.domain.models import AppointmentRequest, AppointmentUpdate, BookingStatus

_ERROR_STATUS: dict[type[BookingError], int] = {
    InvalidSlotLabelError: status.HTTP_400_BAD_REQUEST,
    SlotInPastError: status.HTTP_400_BAD_REQUEST,
    DateOutOfRangeError: status.HTTP_400_BAD_REQUEST,
    SlotAlreadyBookedError: status.HTTP_409_CONFLICT,
    AppointmentNotFoundError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def get_service(request: Request) -> AbstractBookingService:
    return request.app.state.service


async def _booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if code >= 500:
        logger.error("{} {} failed: {}", request.method, request.url.path, exc)
    body = ErrorResponse(error=exc.reason, message=str(exc))
    return JSONResponse(status_code=code, content=body.model_dump())


def create_app(
    service: AbstractBookingService | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Passing ``service`` uses it as-is (its lifecycle stays with the caller);
    otherwise one is built from ``config`` on start-up and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            yield
            return

        owned = build_booking_service(config or AppConfig())
        await owned.start()
        app.state.service = owned
        logger.info("Booking service started")
        try:
            yield
        finally:
            await owned.close()
            logger.info("Booking service stopped")

    app = FastAPI(title="salonbook", lifespan=lifespan)
    if service is not None:
        app.state.service = service

    app.add_exception_handler(BookingError, _booking_error_handler)  # type: ignore[arg-type]

    @app.get("/api/slots", response_model=SlotsResponse, responses=_ERROR_RESPONSES)
    async def list_slots(
        date: dt.date = Query(description="Civil date in the business timezone"),
        svc: AbstractBookingService = Depends(get_service),
    ) -> SlotsResponse:
        slots = await svc.available_slots(date)
        return SlotsResponse(date=date, timezone=svc.timezone_name, slots=slots)

    @app.post(
        "/api/appointments",
        status_code=status.HTTP_201_CREATED,
        response_model=AppointmentResponse,
        responses=_ERROR_RESPONSES,
    )
    async def create_appointment(
        body: AppointmentRequest,
        svc: AbstractBookingService = Depends(get_service),
    ) -> AppointmentResponse:
        appointment = await svc.book(body)
        return AppointmentResponse(
            message="Appointment booked successfully!", appointment=appointment
        )

    @app.get("/api/appointments", response_model=AppointmentListResponse)
    async def list_appointments(
        status_filter: BookingStatus | None = Query(default=None, alias="status"),
        date: dt.date | None = None,
        svc: AbstractBookingService = Depends(get_service),
    ) -> AppointmentListResponse:
        appointments = await svc.list_appointments(status=status_filter, date=date)
        return AppointmentListResponse(appointments=appointments)

    @app.get(
        "/api/appointments/{appointment_id}",
        response_model=AppointmentResponse,
        responses=_ERROR_RESPONSES,
    )
    async def get_appointment(
        appointment_id: str,
        svc: AbstractBookingService = Depends(get_service),
    ) -> AppointmentResponse:
        return AppointmentResponse(appointment=await svc.get_appointment(appointment_id))

    @app.patch(
        "/api/appointments/{appointment_id}",
        response_model=AppointmentResponse,
        responses=_ERROR_RESPONSES,
    )
    async def update_appointment(
        appointment_id: str,
        body: AppointmentUpdate,
        svc: AbstractBookingService = Depends(get_service),
    ) -> AppointmentResponse:
        appointment = await svc.update_appointment(appointment_id, body)
        return AppointmentResponse(
            message="Appointment updated successfully", appointment=appointment
        )

    @app.delete(
        "/api/appointments/{appointment_id}",
        response_model=MessageResponse,
        responses=_ERROR_RESPONSES,
    )
    async def delete_appointment(
        appointment_id: str,
        svc: AbstractBookingService = Depends(get_service),
    ) -> MessageResponse:
        await svc.delete_appointment(appointment_id)
        return MessageResponse(message="Appointment deleted successfully")

    @app.get("/health", response_model=HealthResponse)
    async def health(svc: AbstractBookingService = Depends(get_service)) -> HealthResponse:
        healthy = await svc.health_check()
        return HealthResponse(status="ok" if healthy else "degraded", store=healthy)

    return app
