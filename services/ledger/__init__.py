"""
Ledger client exports.
"""

from .base import LedgerClient, LedgerError, TransferReceipt
from .stub import StubLedgerClient

__all__ = [
    "LedgerClient",
    "LedgerError",
    "TransferReceipt",
    "StubLedgerClient",
]
