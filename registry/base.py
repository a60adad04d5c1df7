"""
Abstract registry store.

Maps a case-folded display name to a UserRecord and keeps two reverse
indices keyed by phone (phone -> name, phone -> address).

Key properties:
- Lookup misses return None, never raise
- Persistence failures raise RegistryPersistenceError
- Every mutation is all-or-nothing: the new table is persisted first and
  only then swapped into memory
- One writer at a time per process (re-entrant lock)
- The table and both indices live in one immutable snapshot that is
  swapped with a single assignment, so lock-free readers see either the
  old state or the new one
- Table order is save order and the indices are always rebuilt from it,
  so memory and a reloaded document resolve shared phones the same way

Subclasses only decide where the table lives (_load_table/_write_table).
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from registry.types import PublicUser, UserRecord

logger = logging.getLogger(__name__)


class RegistryPersistenceError(Exception):
    """Registry could not be read from or written to its backing storage."""
    pass


@dataclass(frozen=True)
class RegistrySnapshot:
    """Primary table plus the phone indices derived from it."""
    records: Mapping[str, UserRecord] = field(default_factory=dict)
    phone_to_name: Mapping[str, str] = field(default_factory=dict)
    phone_to_address: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_table(cls, table: dict[str, UserRecord]) -> "RegistrySnapshot":
        phone_to_name, phone_to_address = _build_indices(table)
        return cls(
            records=MappingProxyType(dict(table)),
            phone_to_name=MappingProxyType(phone_to_name),
            phone_to_address=MappingProxyType(phone_to_address),
        )


class RegistryStore(ABC):
    """
    Name -> phone -> address registry.

    Callers depend ONLY on this interface; JsonRegistryStore and
    InMemoryRegistryStore are interchangeable.
    """

    def __init__(self):
        self._state = RegistrySnapshot()
        self._initialized = False
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Storage hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _load_table(self) -> dict[str, UserRecord]:
        """
        Load every persisted record, keyed by case-folded name.

        Returns an empty dict when nothing has been persisted yet.

        Raises:
            RegistryPersistenceError: storage exists but cannot be read
        """
        raise NotImplementedError

    @abstractmethod
    def _write_table(self, table: dict[str, UserRecord]) -> None:
        """
        Persist the full table, replacing previous contents.

        Raises:
            RegistryPersistenceError: write failed; previous contents intact
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load persisted records once. Subsequent calls are no-ops."""
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            table = self._load_table()

            self._state = RegistrySnapshot.from_table(table)
            self._initialized = True

            if table:
                logger.info(f"Loaded {len(table)} registry records from storage")
            else:
                logger.info("No existing registry records found, starting fresh")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def save_record(
        self,
        name: str,
        phone: str,
        address: str,
        secret: Optional[str] = None,
    ) -> UserRecord:
        """
        Insert or wholesale-replace the record for `name` (case-insensitive).

        A previous secret is dropped when `secret` is omitted (an empty
        string counts as omitted). The record moves to the end of the table
        and the phone indices are rebuilt from it: a phone resolves to the
        most recently saved record that still holds it, and a phone nobody
        holds any more disappears from the indices.

        Returns:
            The stored UserRecord

        Raises:
            RegistryPersistenceError: the table could not be persisted; the
            in-memory state is left exactly as it was
        """
        with self._lock:
            self.initialize()

            record = UserRecord(name=name, phone=phone, address=address, secret=secret or None)

            table = dict(self._state.records)
            table.pop(record.key, None)
            table[record.key] = record

            self._write_table(table)

            self._state = RegistrySnapshot.from_table(table)

        logger.info(
            f"Saved registry record: {record.name}",
            extra={
                "registry_name": record.name,
                "phone": record.phone,
                "address": record.address,
                "has_secret": record.secret is not None,
            }
        )
        return record

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_by_name(self, name: str) -> Optional[UserRecord]:
        self.initialize()
        return self._state.records.get(name.lower())

    def lookup_by_phone(self, phone: str) -> Optional[UserRecord]:
        self.initialize()
        state = self._state
        name = state.phone_to_name.get(phone)
        if name is None:
            return None
        return state.records.get(name.lower())

    def lookup_by_identifier(self, value: str) -> Optional[UserRecord]:
        """Resolve `value` as a name first, then as a phone."""
        record = self.lookup_by_name(value)
        if record is not None:
            return record
        return self.lookup_by_phone(value)

    def list_all(self) -> list[PublicUser]:
        """Public fields of every record, least recently saved first."""
        self.initialize()
        return [record.public() for record in self._state.records.values()]

    def secret_for_phone(self, phone: str) -> Optional[str]:
        record = self.lookup_by_phone(phone)
        if record is None:
            return None
        return record.secret

    # Single-field lookups

    def address_by_name(self, name: str) -> Optional[str]:
        record = self.lookup_by_name(name)
        return record.address if record else None

    def phone_by_name(self, name: str) -> Optional[str]:
        record = self.lookup_by_name(name)
        return record.phone if record else None

    def name_by_phone(self, phone: str) -> Optional[str]:
        self.initialize()
        return self._state.phone_to_name.get(phone)

    def address_by_phone(self, phone: str) -> Optional[str]:
        self.initialize()
        return self._state.phone_to_address.get(phone)

    def __len__(self) -> int:
        self.initialize()
        return len(self._state.records)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.lookup_by_name(name) is not None


def _build_indices(
    table: dict[str, UserRecord],
) -> tuple[dict[str, str], dict[str, str]]:
    """Derive phone -> name and phone -> address. Later records win."""
    phone_to_name: dict[str, str] = {}
    phone_to_address: dict[str, str] = {}
    for record in table.values():
        phone_to_name[record.phone] = record.name
        phone_to_address[record.phone] = record.address
    return phone_to_name, phone_to_address
