"""
Lookup helper tests: registry resolution combined with the ledger stub.
"""

import pytest
import pytest_asyncio

from registry import InMemoryRegistryStore
from registry.lookup import balance_for_phone, is_registered, resolve_address, signer_for_phone
from services.ledger import LedgerError, StubLedgerClient


ADDR_B = "0x" + "b" * 64


@pytest.fixture
def ledger():
    return StubLedgerClient()


@pytest_asyncio.fixture
async def registered(ledger):
    """Store with Alice (address derived from her secret) and Bob (no secret)."""
    store = InMemoryRegistryStore()
    alice_address = await ledger.derive_address("alice-secret")
    store.save_record("Alice", "+15550000001", alice_address, secret="alice-secret")
    store.save_record("Bob", "+15550000002", ADDR_B)
    return store


class TestResolveAddress:

    def test_by_name_and_phone(self):
        store = InMemoryRegistryStore()
        store.save_record("Bob", "+15550000002", ADDR_B)

        assert resolve_address(store, "bob") == ADDR_B
        assert resolve_address(store, "+15550000002") == ADDR_B
        assert resolve_address(store, "carol") is None

    def test_is_registered(self):
        store = InMemoryRegistryStore()
        store.save_record("Bob", "+15550000002", ADDR_B)

        assert is_registered(store, "+15550000002")
        assert not is_registered(store, "+15550000003")


class TestBalanceForPhone:

    @pytest.mark.asyncio
    async def test_registered_phone(self, registered, ledger):
        ledger.balances[ADDR_B] = 250_000_000

        assert await balance_for_phone(registered, ledger, "+15550000002") == 250_000_000

    @pytest.mark.asyncio
    async def test_registered_phone_without_funds(self, registered, ledger):
        assert await balance_for_phone(registered, ledger, "+15550000002") == 0

    @pytest.mark.asyncio
    async def test_unregistered_phone_returns_none(self, registered, ledger):
        assert await balance_for_phone(registered, ledger, "+15559999999") is None


class TestSignerForPhone:

    @pytest.mark.asyncio
    async def test_derives_address_from_stored_secret(self, registered, ledger):
        signer = await signer_for_phone(registered, ledger, "+15550000001")
        assert signer == registered.address_by_phone("+15550000001")

    @pytest.mark.asyncio
    async def test_no_secret_returns_none(self, registered, ledger):
        assert await signer_for_phone(registered, ledger, "+15550000002") is None

    @pytest.mark.asyncio
    async def test_unregistered_returns_none(self, registered, ledger):
        assert await signer_for_phone(registered, ledger, "+15559999999") is None

    @pytest.mark.asyncio
    async def test_mismatched_secret_still_returns_derived_address(self, ledger):
        store = InMemoryRegistryStore()
        store.save_record("Mallory", "+15550000004", ADDR_B, secret="other")

        signer = await signer_for_phone(store, ledger, "+15550000004")

        assert signer == await ledger.derive_address("other")
        assert signer != ADDR_B

    @pytest.mark.asyncio
    async def test_empty_secret_is_not_stored(self, ledger):
        store = InMemoryRegistryStore()
        store.save_record("Empty", "+15550000005", ADDR_B, secret="")

        assert store.secret_for_phone("+15550000005") is None
        assert await signer_for_phone(store, ledger, "+15550000005") is None

    @pytest.mark.asyncio
    async def test_ledger_errors_propagate(self):
        class BrokenLedger(StubLedgerClient):
            async def derive_address(self, secret):
                raise LedgerError("node unreachable")

        store = InMemoryRegistryStore()
        store.save_record("Alice", "+15550000001", ADDR_B, secret="s")

        with pytest.raises(LedgerError):
            await signer_for_phone(store, BrokenLedger(), "+15550000001")
