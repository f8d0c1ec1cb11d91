from typing import Any

import httpx
from loguru import logger

from salonbook.domain.exceptions import NotificationError
from salonbook.notifications.templates import EmailMessage


class ResendEmailSender:
    """Email delivery through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        from_address: str,
        *,
        api_url: str = "https://api.resend.com/emails",
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._from_address = from_address
        self._client = httpx.AsyncClient(timeout=30)

    async def send(self, message: EmailMessage) -> None:
        if not self._api_key:
            raise NotificationError("No Resend API key configured", recipient=message.to)

        try:
            resp = await self._client.post(
                self._api_url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self._from_address,
                    "to": [message.to],
                    "subject": message.subject,
                    "html": message.html,
                },
            )
            resp.raise_for_status()
            data: dict[str, Any] = resp.json()
        except httpx.HTTPStatusError as exc:
            raise NotificationError(
                f"Resend rejected the message (status {exc.response.status_code})",
                recipient=message.to,
            ) from exc
        except Exception as exc:
            raise NotificationError(f"Resend request failed: {exc}", recipient=message.to) from exc

        logger.info("Email sent via Resend: id={}", data.get("id", "unknown"))

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("Resend client closed")
