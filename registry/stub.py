"""
In-memory registry store for testing and offline development.

Same semantics as JsonRegistryStore, nothing touches disk.
"""

from typing import Iterable, Optional

from registry.base import RegistryPersistenceError, RegistryStore
from registry.types import UserRecord


class InMemoryRegistryStore(RegistryStore):
    """
    Deterministic registry backed by a plain dict.

    `seed` pre-populates the table as if it had been loaded from storage.
    `fail_writes` makes every save raise, to exercise failure paths.
    """

    def __init__(
        self,
        seed: Optional[Iterable[UserRecord]] = None,
        fail_writes: bool = False,
    ):
        super().__init__()
        self._seed = list(seed or [])
        self.fail_writes = fail_writes
        self.write_count = 0

    def _load_table(self) -> dict[str, UserRecord]:
        return {record.key: record for record in self._seed}

    def _write_table(self, table: dict[str, UserRecord]) -> None:
        if self.fail_writes:
            raise RegistryPersistenceError("Writes disabled for this store")
        self.write_count += 1
