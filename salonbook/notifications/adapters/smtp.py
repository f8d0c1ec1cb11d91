import asyncio
import smtplib
import ssl
from email.mime.text import MIMEText

from loguru import logger

from salonbook.domain.exceptions import NotificationError
from salonbook.notifications.templates import EmailMessage


class SmtpEmailSender:
    """Email delivery through an SMTP server.

    ``smtplib`` is blocking, so each send runs in a worker thread.  Port 465
    uses implicit TLS; any other port upgrades with STARTTLS when
    ``use_tls`` is set.
    """

    def __init__(
        self,
        host: str,
        from_address: str,
        *,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 30,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._from_address = from_address
        self._timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        if self._port == 465:
            return smtplib.SMTP_SSL(
                self._host, self._port, context=ssl.create_default_context(), timeout=self._timeout
            )
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        if self._use_tls:
            server.starttls(context=ssl.create_default_context())
        return server

    def _send_blocking(self, message: EmailMessage) -> None:
        mime = MIMEText(message.html, "html")
        mime["Subject"] = message.subject
        mime["From"] = self._from_address
        mime["To"] = message.to

        with self._connect() as server:
            if self._username:
                server.login(self._username, self._password)
            server.sendmail(
                self._from_address.split("<")[-1].rstrip(">"), [message.to], mime.as_string()
            )

    async def send(self, message: EmailMessage) -> None:
        if not self._host:
            raise NotificationError("No SMTP host configured", recipient=message.to)

        try:
            await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery failed: {exc}", recipient=message.to) from exc

        logger.info("Email sent via SMTP host {}", self._host)

    async def close(self) -> None:
        return None
