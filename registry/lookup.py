"""
Resolution helpers over a RegistryStore.

Misses return None. Ledger errors propagate to the caller.
"""

import logging
from typing import Optional

from registry.base import RegistryStore
from services.ledger import LedgerClient

logger = logging.getLogger(__name__)


def resolve_address(store: RegistryStore, identifier: str) -> Optional[str]:
    """Ledger address for a registered name or phone."""
    record = store.lookup_by_identifier(identifier)
    return record.address if record else None


def is_registered(store: RegistryStore, phone: str) -> bool:
    return store.address_by_phone(phone) is not None


async def balance_for_phone(
    store: RegistryStore,
    ledger: LedgerClient,
    phone: str,
) -> Optional[int]:
    """
    Base-unit balance of the account registered to `phone`.

    Returns None if the phone is not registered.
    """
    address = store.address_by_phone(phone)
    if address is None:
        logger.debug(f"Balance requested for unregistered phone {phone}")
        return None
    return await ledger.get_balance(address)


async def signer_for_phone(
    store: RegistryStore,
    ledger: LedgerClient,
    phone: str,
) -> Optional[str]:
    """
    Address controlled by the secret stored for `phone`.

    Returns None when no secret is stored. A mismatch with the registered
    address is logged, not raised.
    """
    secret = store.secret_for_phone(phone)
    if secret is None:
        return None

    address = await ledger.derive_address(secret)
    registered = store.address_by_phone(phone)
    if registered is not None and registered.lower() != address.lower():
        logger.warning(
            "Stored secret does not control the registered address",
            extra={"phone": phone, "registered_address": registered},
        )
    return address
