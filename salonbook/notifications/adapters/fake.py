from salonbook.notifications.templates import EmailMessage


class RecordingEmailSender:
    """In-memory test double for the EmailSenderProtocol protocol.

    After calls, inspect ``sent`` to verify what would have been delivered.
    Set ``send_error`` to make every ``send`` raise.
    """

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.closed: bool = False
        self.send_error: Exception | None = None

    async def send(self, message: EmailMessage) -> None:
        if self.send_error:
            raise self.send_error
        self.sent.append(message)

    async def close(self) -> None:
        self.closed = True
