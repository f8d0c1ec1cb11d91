from loguru import logger

from salonbook.domain.exceptions import NotificationError
from salonbook.domain.models import Appointment
from salonbook.notifications import templates
from salonbook.notifications.ports import EmailSenderProtocol
from salonbook.notifications.templates import EmailMessage


class AppointmentNotifier:
    """Sends booking emails; delivery failures are logged and never raised."""

    def __init__(
        self,
        sender: EmailSenderProtocol,
        *,
        business_name: str,
        admin_address: str = "",
    ) -> None:
        self._sender = sender
        self._business_name = business_name
        self._admin_address = admin_address

    async def _deliver(self, message: EmailMessage) -> bool:
        try:
            await self._sender.send(message)
        except NotificationError as exc:
            logger.warning("Notification '{}' not delivered: {}", message.subject, exc.reason)
            return False
        except Exception:
            logger.exception("Unexpected error delivering '{}'", message.subject)
            return False
        return True

    async def booking_received(self, appointment: Appointment) -> None:
        await self._deliver(templates.customer_confirmation(appointment, self._business_name))

        if not self._admin_address:
            logger.info("Admin email not configured, skipping admin notification")
            return
        await self._deliver(
            templates.admin_notification(appointment, self._business_name, self._admin_address)
        )

    async def status_changed(self, appointment: Appointment) -> None:
        await self._deliver(templates.status_update(appointment, self._business_name))

    async def close(self) -> None:
        await self._sender.close()
