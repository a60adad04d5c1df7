"""
Messaging client exports.
"""

from .base import MessagingClient, MessagingError, SendResult
from .stub import StubMessagingClient
from .whatsapp import WhatsAppCloudMessagingClient, to_whatsapp_recipient

__all__ = [
    "MessagingClient",
    "MessagingError",
    "SendResult",
    "StubMessagingClient",
    "WhatsAppCloudMessagingClient",
    "to_whatsapp_recipient",
]
