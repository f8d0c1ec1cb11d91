import datetime as dt
from typing import Callable

from loguru import logger

from salonbook.booking.service import BookingService
from salonbook.config import AppConfig, EmailAdapter, StoreAdapter
from salonbook.notifications.adapters.disabled import DisabledEmailSender
from salonbook.notifications.adapters.resend import ResendEmailSender
from salonbook.notifications.adapters.smtp import SmtpEmailSender
from salonbook.notifications.notifier import AppointmentNotifier
from salonbook.notifications.ports import EmailSenderProtocol
from salonbook.scheduling.clock import BusinessClock
from salonbook.scheduling.slots import SlotCalculator
from salonbook.store.adapters.memory import InMemoryAppointmentStore
from salonbook.store.adapters.sql import SqlAppointmentStore
from salonbook.store.ports import AppointmentStoreProtocol


def _build_memory_store(config: AppConfig) -> AppointmentStoreProtocol:
    return InMemoryAppointmentStore()


def _build_sql_store(config: AppConfig) -> AppointmentStoreProtocol:
    return SqlAppointmentStore(config.store.database_url)


def _build_disabled_sender(config: AppConfig) -> EmailSenderProtocol:
    return DisabledEmailSender()


def _build_resend_sender(config: AppConfig) -> EmailSenderProtocol:
    return ResendEmailSender(
        api_key=config.email.resend_api_key,
        from_address=config.email.from_address,
        api_url=config.email.resend_api_url,
    )


def _build_smtp_sender(config: AppConfig) -> EmailSenderProtocol:
    return SmtpEmailSender(
        host=config.email.smtp_host,
        from_address=config.email.from_address,
        port=config.email.smtp_port,
        username=config.email.smtp_username,
        password=config.email.smtp_password,
        use_tls=config.email.smtp_use_tls,
    )


_STORE_BUILDERS: dict[StoreAdapter, Callable[[AppConfig], AppointmentStoreProtocol]] = {
    StoreAdapter.MEMORY: _build_memory_store,
    StoreAdapter.SQL: _build_sql_store,
}

_SENDER_BUILDERS: dict[EmailAdapter, Callable[[AppConfig], EmailSenderProtocol]] = {
    EmailAdapter.DISABLED: _build_disabled_sender,
    EmailAdapter.RESEND: _build_resend_sender,
    EmailAdapter.SMTP: _build_smtp_sender,
}


def build_store(config: AppConfig) -> AppointmentStoreProtocol:
    """Build the appointment store selected in config."""
    adapter = config.store.adapter
    logger.info("Building appointment store with adapter: {}", adapter.value)
    return _STORE_BUILDERS[adapter](config)


def build_email_sender(config: AppConfig) -> EmailSenderProtocol:
    """Build the email sender selected in config."""
    adapter = config.email.adapter
    logger.info("Building email sender with adapter: {}", adapter.value)
    return _SENDER_BUILDERS[adapter](config)


def build_booking_service(
    config: AppConfig,
    *,
    now_source: Callable[[], dt.datetime] | None = None,
) -> BookingService:
    """Wire clock, calculator, store and notifier into a BookingService."""
    clock = (
        BusinessClock(config.business_timezone, now_source)
        if now_source
        else BusinessClock(config.business_timezone)
    )
    notifier = AppointmentNotifier(
        build_email_sender(config),
        business_name=config.business_name,
        admin_address=config.email.admin_address,
    )
    return BookingService(
        build_store(config),
        SlotCalculator(clock),
        notifier,
        max_advance_days=config.max_advance_days,
    )
