"""
Messaging client abstract interface.

Role: deliver a plain-text reply to a phone-addressable endpoint.
No formatting intelligence. No retries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class MessagingError(Exception):
    """Failed to deliver a message."""
    pass


@dataclass(frozen=True)
class SendResult:
    """Accepted outbound message."""

    to: str
    message_id: Optional[str] = None
    status: str = "accepted"


class MessagingClient(ABC):
    """
    Abstract messaging boundary.
    Callers must depend ONLY on this interface.
    """

    @abstractmethod
    async def send_text(self, to: str, body: str) -> SendResult:
        """
        Send a text message.

        Args:
            to: Recipient phone (E.164, optionally 'whatsapp:'-prefixed)
            body: Message text

        Returns:
            SendResult for the accepted message

        Raises:
            MessagingError: delivery was not accepted
        """
        raise NotImplementedError
