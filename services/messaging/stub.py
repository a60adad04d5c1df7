"""
Stub messaging client for testing and offline development.
"""

from typing import List, Tuple

from .base import MessagingClient, MessagingError, SendResult


class StubMessagingClient(MessagingClient):
    """
    Records outbound messages instead of sending them.

    `sent` holds (to, body) tuples in send order.
    """

    def __init__(self, fail: bool = False):
        self.sent: List[Tuple[str, str]] = []
        self.fail = fail

    async def send_text(self, to: str, body: str) -> SendResult:
        if self.fail:
            raise MessagingError("Stub messaging configured to fail")
        self.sent.append((to, body))
        return SendResult(to=to, message_id=f"stub-{len(self.sent)}")
