"""
Stub ledger client for testing and offline development.

Deterministic, in-memory, never touches the network.
"""

import hashlib
import logging
from typing import Any, Callable, Dict, List, Optional

from .base import LedgerClient, LedgerError, TransferReceipt

logger = logging.getLogger(__name__)

ViewHandler = Callable[[List[Any]], List[Any]]


class StubLedgerClient(LedgerClient):
    """
    Deterministic fake ledger.

    - Address of a secret is 0x + sha256(secret)
    - Balances live in a dict keyed by address
    - Transfers move balance between addresses; overdrafts are rejected
    - View functions are answered by registered handlers
    """

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        self.balances: Dict[str, int] = dict(balances or {})
        self.transfers: List[TransferReceipt] = []
        self._views: Dict[str, ViewHandler] = {}

    def register_view(self, function: str, handler: ViewHandler) -> None:
        """Answer `function` with `handler(arguments)`."""
        self._views[function] = handler

    async def derive_address(self, secret: str) -> str:
        if not secret:
            raise LedgerError("Empty secret")
        return "0x" + hashlib.sha256(secret.encode("utf-8")).hexdigest()

    async def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)

    async def transfer(
        self,
        secret: str,
        recipient_address: str,
        amount_units: int,
    ) -> TransferReceipt:
        if amount_units <= 0:
            raise LedgerError(f"Transfer amount must be positive, got {amount_units}")

        sender = await self.derive_address(secret)
        available = self.balances.get(sender, 0)
        if available < amount_units:
            raise LedgerError(
                f"Insufficient balance: {available} < {amount_units}"
            )

        self.balances[sender] = available - amount_units
        self.balances[recipient_address] = self.balances.get(recipient_address, 0) + amount_units

        seq = len(self.transfers)
        tx_hash = "0x" + hashlib.sha256(
            f"{sender}:{recipient_address}:{amount_units}:{seq}".encode("utf-8")
        ).hexdigest()

        receipt = TransferReceipt(
            transaction_hash=tx_hash,
            sender=sender,
            recipient=recipient_address,
            amount_units=amount_units,
            vm_status="Executed successfully",
        )
        self.transfers.append(receipt)
        logger.debug(f"Stub transfer {tx_hash}: {amount_units} {sender} -> {recipient_address}")
        return receipt

    async def view(self, function: str, arguments: List[Any]) -> List[Any]:
        handler = self._views.get(function)
        if handler is None:
            raise LedgerError(f"Unknown view function: {function}")
        return handler(arguments)
