"""
WhatsApp Cloud API messaging client.

Sends text replies through the Graph API messages endpoint.
No formatting intelligence. No retries.
"""

import logging
import os
from typing import Optional

import httpx

from .base import MessagingClient, MessagingError, SendResult

logger = logging.getLogger(__name__)

GRAPH_API_BASE_URL = "https://graph.facebook.com"


def to_whatsapp_recipient(phone: str) -> str:
    """
    Cloud API recipient id: digits only.

    'whatsapp:+15551234567' -> '15551234567'
    """
    value = phone.strip()
    if value.lower().startswith("whatsapp:"):
        value = value[len("whatsapp:"):]
    return value.lstrip("+")


class WhatsAppCloudMessagingClient(MessagingClient):
    """
    Messaging over the WhatsApp Cloud API.

    Configuration falls back to WHATSAPP_ACCESS_TOKEN,
    WHATSAPP_PHONE_NUMBER_ID and WHATSAPP_API_VERSION.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        phone_number_id: Optional[str] = None,
        api_version: Optional[str] = None,
        base_url: str = GRAPH_API_BASE_URL,
        timeout: float = 30.0,
    ):
        self.access_token = access_token or os.getenv("WHATSAPP_ACCESS_TOKEN")
        self.phone_number_id = phone_number_id or os.getenv("WHATSAPP_PHONE_NUMBER_ID")
        self.api_version = api_version or os.getenv("WHATSAPP_API_VERSION", "v18.0")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.api_version}/{self.phone_number_id}/messages"

    async def send_text(self, to: str, body: str) -> SendResult:
        if not self.access_token:
            raise MessagingError("WHATSAPP_ACCESS_TOKEN not configured")
        if not self.phone_number_id:
            raise MessagingError("WHATSAPP_PHONE_NUMBER_ID not configured")

        recipient = to_whatsapp_recipient(to)
        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": recipient,
            "type": "text",
            "text": {
                "body": body
            }
        }
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json"
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    headers=headers,
                    timeout=self.timeout
                )
        except httpx.RequestError as e:
            logger.error(
                f"HTTP request failed: {e}",
                exc_info=True,
                extra={"recipient": recipient, "error": str(e)}
            )
            raise MessagingError(f"HTTP request failed: {e}") from e

        if response.status_code != 200:
            error_text = response.text
            logger.error(
                f"WhatsApp API error: {response.status_code} - {error_text}",
                extra={
                    "status_code": response.status_code,
                    "error_body": error_text,
                }
            )
            raise MessagingError(f"WhatsApp API returned {response.status_code}")

        try:
            result = response.json()
            messages = result.get("messages") or [{}]
            message_id = messages[0].get("id")
            status = messages[0].get("message_status", "accepted")
        except (ValueError, AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error(
                f"Unexpected WhatsApp API response body: {e}",
                exc_info=True,
                extra={"recipient": recipient, "error_body": response.text}
            )
            raise MessagingError(f"Unexpected WhatsApp API response: {e}") from e

        logger.info(
            f"Message sent to {recipient}",
            extra={"recipient": recipient, "response_id": message_id}
        )
        return SendResult(
            to=recipient,
            message_id=message_id,
            status=status,
        )
