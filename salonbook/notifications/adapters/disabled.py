from loguru import logger

from salonbook.notifications.templates import EmailMessage


class DisabledEmailSender:
    """Sender used when no email transport is configured; drops every message."""

    async def send(self, message: EmailMessage) -> None:
        logger.info("Email not configured, skipping '{}'", message.subject)

    async def close(self) -> None:
        return None
