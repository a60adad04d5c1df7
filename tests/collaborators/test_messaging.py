"""
Messaging Client Tests

- Stub records messages
- WhatsApp Cloud client builds the Graph API request and maps failures
  to MessagingError (no retries)
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from services.messaging import (
    MessagingClient,
    MessagingError,
    SendResult,
    StubMessagingClient,
    WhatsAppCloudMessagingClient,
    to_whatsapp_recipient,
)


def _mock_async_client(response=None, error=None):
    """AsyncClient replacement usable as `async with httpx.AsyncClient() as c`."""
    client = MagicMock()
    if error is not None:
        client.post = AsyncMock(side_effect=error)
    else:
        client.post = AsyncMock(return_value=response)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=client)
    context.__aexit__ = AsyncMock(return_value=False)
    return context, client


def _response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    response.text = text
    return response


class TestStubMessaging:

    @pytest.mark.asyncio
    async def test_records_sent_messages(self):
        client = StubMessagingClient()

        first = await client.send_text("+15550000001", "hello")
        second = await client.send_text("+15550000002", "bye")

        assert isinstance(client, MessagingClient)
        assert client.sent == [("+15550000001", "hello"), ("+15550000002", "bye")]
        assert first == SendResult(to="+15550000001", message_id="stub-1")
        assert second.message_id == "stub-2"

    @pytest.mark.asyncio
    async def test_configured_failure(self):
        client = StubMessagingClient(fail=True)
        with pytest.raises(MessagingError):
            await client.send_text("+15550000001", "hello")
        assert client.sent == []


class TestRecipientFormatting:

    @pytest.mark.parametrize("raw,expected", [
        ("+15551234567", "15551234567"),
        ("whatsapp:+15551234567", "15551234567"),
        ("WhatsApp:+447911123456", "447911123456"),
        (" 15551234567 ", "15551234567"),
    ])
    def test_to_whatsapp_recipient(self, raw, expected):
        assert to_whatsapp_recipient(raw) == expected


class TestWhatsAppCloudClient:

    @pytest.mark.asyncio
    async def test_send_text_success(self):
        client = WhatsAppCloudMessagingClient(
            access_token="token",
            phone_number_id="12345",
            api_version="v18.0",
        )
        context, http = _mock_async_client(_response(
            body={
                "messaging_product": "whatsapp",
                "contacts": [{"input": "15551234567", "wa_id": "15551234567"}],
                "messages": [{"id": "wamid.abc"}],
            }
        ))

        with patch("services.messaging.whatsapp.httpx.AsyncClient", return_value=context):
            result = await client.send_text("whatsapp:+15551234567", "Balance: 1.00000000")

        assert result == SendResult(to="15551234567", message_id="wamid.abc", status="accepted")

        args, kwargs = http.post.call_args
        assert args[0] == "https://graph.facebook.com/v18.0/12345/messages"
        assert kwargs["json"] == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": "15551234567",
            "type": "text",
            "text": {"body": "Balance: 1.00000000"},
        }
        assert kwargs["headers"]["Authorization"] == "Bearer token"
        assert kwargs["timeout"] == 30.0

    @pytest.mark.asyncio
    async def test_non_200_raises(self):
        client = WhatsAppCloudMessagingClient(access_token="token", phone_number_id="12345")
        context, http = _mock_async_client(_response(status_code=400, text="bad request"))

        with patch("services.messaging.whatsapp.httpx.AsyncClient", return_value=context):
            with pytest.raises(MessagingError, match="400"):
                await client.send_text("+15551234567", "hi")

        assert http.post.await_count == 1  # No retries

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self):
        client = WhatsAppCloudMessagingClient(access_token="token", phone_number_id="12345")
        response = _response(text="<html>oops</html>")
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        context, _ = _mock_async_client(response)

        with patch("services.messaging.whatsapp.httpx.AsyncClient", return_value=context):
            with pytest.raises(MessagingError, match="Unexpected WhatsApp API response"):
                await client.send_text("+15551234567", "hi")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["not", "an", "object"], {"messages": [None]}, {"messages": ["id"]}])
    async def test_malformed_body_raises(self, body):
        client = WhatsAppCloudMessagingClient(access_token="token", phone_number_id="12345")
        response = _response()
        response.json.return_value = body
        context, _ = _mock_async_client(response)

        with patch("services.messaging.whatsapp.httpx.AsyncClient", return_value=context):
            with pytest.raises(MessagingError):
                await client.send_text("+15551234567", "hi")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        client = WhatsAppCloudMessagingClient(access_token="token", phone_number_id="12345")
        context, _ = _mock_async_client(error=httpx.ConnectError("connection refused"))

        with patch("services.messaging.whatsapp.httpx.AsyncClient", return_value=context):
            with pytest.raises(MessagingError, match="HTTP request failed"):
                await client.send_text("+15551234567", "hi")

    @pytest.mark.asyncio
    async def test_missing_token_raises(self):
        with patch.dict("os.environ", {}, clear=True):
            client = WhatsAppCloudMessagingClient(phone_number_id="12345")

            with pytest.raises(MessagingError, match="WHATSAPP_ACCESS_TOKEN"):
                await client.send_text("+15551234567", "hi")

    @pytest.mark.asyncio
    async def test_missing_phone_number_id_raises(self):
        with patch.dict("os.environ", {}, clear=True):
            client = WhatsAppCloudMessagingClient(access_token="token")

            with pytest.raises(MessagingError, match="WHATSAPP_PHONE_NUMBER_ID"):
                await client.send_text("+15551234567", "hi")

    def test_configuration_from_environment(self):
        env = {
            "WHATSAPP_ACCESS_TOKEN": "env-token",
            "WHATSAPP_PHONE_NUMBER_ID": "999",
            "WHATSAPP_API_VERSION": "v19.0",
        }
        with patch.dict("os.environ", env, clear=True):
            client = WhatsAppCloudMessagingClient()

        assert client.access_token == "env-token"
        assert client.endpoint == "https://graph.facebook.com/v19.0/999/messages"
