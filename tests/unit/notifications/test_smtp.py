import smtplib
from unittest.mock import MagicMock

import pytest

from salonbook.domain.exceptions import NotificationError
from salonbook.notifications.adapters import smtp as smtp_module
from salonbook.notifications.adapters.smtp import SmtpEmailSender
from salonbook.notifications.templates import EmailMessage


@pytest.fixture
def message() -> EmailMessage:
    return EmailMessage(to="jane@example.com", subject="Hello", html="<p>Hi</p>")


@pytest.fixture
def smtp_server(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    server = MagicMock()
    server.__enter__.return_value = server
    factory = MagicMock(return_value=server)
    monkeypatch.setattr(smtp_module.smtplib, "SMTP", factory)
    return server


class TestSend:
    @pytest.mark.asyncio
    async def test_logs_in_and_sends(self, smtp_server: MagicMock, message: EmailMessage) -> None:
        sender = SmtpEmailSender(
            "smtp.salon.test",
            "Salon <hello@salon.test>",
            username="hello@salon.test",
            password="secret",
        )

        await sender.send(message)

        smtp_server.starttls.assert_called_once()
        smtp_server.login.assert_called_once_with("hello@salon.test", "secret")
        from_addr, recipients, body = smtp_server.sendmail.call_args[0]
        assert from_addr == "hello@salon.test"
        assert recipients == ["jane@example.com"]
        assert "Subject: Hello" in body

    @pytest.mark.asyncio
    async def test_skips_tls_and_login_when_not_configured(
        self, smtp_server: MagicMock, message: EmailMessage
    ) -> None:
        sender = SmtpEmailSender("smtp.salon.test", "hello@salon.test", port=25, use_tls=False)

        await sender.send(message)

        smtp_server.starttls.assert_not_called()
        smtp_server.login.assert_not_called()
        smtp_server.sendmail.assert_called_once()

    @pytest.mark.asyncio
    async def test_wraps_smtp_errors(self, smtp_server: MagicMock, message: EmailMessage) -> None:
        smtp_server.sendmail.side_effect = smtplib.SMTPRecipientsRefused({})
        sender = SmtpEmailSender("smtp.salon.test", "hello@salon.test")

        with pytest.raises(NotificationError, match="SMTP delivery failed"):
            await sender.send(message)

    @pytest.mark.asyncio
    async def test_missing_host_fails(self, message: EmailMessage) -> None:
        sender = SmtpEmailSender("", "hello@salon.test")

        with pytest.raises(NotificationError, match="No SMTP host"):
            await sender.send(message)
