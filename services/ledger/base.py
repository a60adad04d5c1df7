"""
Ledger client abstract interface.

Role: account operations on the remote ledger network.

Rules:
- No registry access (callers resolve phones to addresses first)
- Amounts are integer base units
- All failures raise LedgerError
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional


class LedgerError(Exception):
    """Ledger operation failed."""
    pass


@dataclass(frozen=True)
class TransferReceipt:
    """Confirmed transfer."""

    transaction_hash: str
    sender: str
    recipient: str
    amount_units: int
    success: bool = True
    vm_status: Optional[str] = None


class LedgerClient(ABC):
    """
    Abstract ledger boundary.
    Callers must depend ONLY on this interface.
    """

    @abstractmethod
    async def derive_address(self, secret: str) -> str:
        """
        Derive the account address controlled by `secret`.

        Raises:
            LedgerError: secret is malformed
        """
        raise NotImplementedError

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Fungible balance of `address` in base units (0 for unknown accounts)."""
        raise NotImplementedError

    @abstractmethod
    async def transfer(
        self,
        secret: str,
        recipient_address: str,
        amount_units: int,
    ) -> TransferReceipt:
        """
        Sign and submit a transfer, then wait for confirmation.

        Raises:
            LedgerError: rejected, failed on chain, or not confirmed
        """
        raise NotImplementedError

    @abstractmethod
    async def view(self, function: str, arguments: List[Any]) -> List[Any]:
        """
        Evaluate a read-only contract function.

        Args:
            function: Fully qualified function id (address::module::name)
            arguments: Positional arguments

        Returns:
            The function's return values
        """
        raise NotImplementedError
