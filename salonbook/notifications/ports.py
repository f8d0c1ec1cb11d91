from typing import Protocol

from salonbook.notifications.templates import EmailMessage


class EmailSenderProtocol(Protocol):
    """Low-level interface for outbound email delivery."""

    async def send(self, message: EmailMessage) -> None:
        """Deliver a message.

        Raises:
            NotificationError: If the message could not be delivered.
        """
        ...

    async def close(self) -> None:
        """Release resources."""
        ...
