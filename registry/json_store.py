"""
JSON-file-backed registry store.

The whole table lives in memory and is mirrored to a single JSON document:

    {
        "alice": {"name": "Alice", "phone": "+15551234567",
                  "address": "0x...", "secret": "0x..."},
        ...
    }

Keys are case-folded names. `secret` is omitted when not stored.

Writes go to a sibling temp file that is then os.replace()d over the
document, so a crash mid-write leaves the previous document intact.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from registry.base import RegistryPersistenceError, RegistryStore
from registry.types import UserRecord

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = "./data/name_mappings.json"


class JsonRegistryStore(RegistryStore):
    """
    Registry persisted as one JSON document, rewritten in full on every save.

    Design:
    - Lazy: nothing touches disk until the first operation
    - Missing file means no records yet
    - Unparseable file is an error (the store refuses to overwrite it)
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Args:
            path: Location of the JSON document. Parent directories are
                  created on first use.
        """
        super().__init__()
        self.path = Path(path or DEFAULT_REGISTRY_PATH)

    def _load_table(self) -> dict[str, UserRecord]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create registry directory {self.path.parent}: {e}")
            raise RegistryPersistenceError(
                f"Cannot create registry directory {self.path.parent}: {e}"
            ) from e

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.error(f"Cannot read registry file {self.path}: {e}")
            raise RegistryPersistenceError(f"Cannot read registry file {self.path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted registry file {self.path}: {e}")
            raise RegistryPersistenceError(f"Corrupted registry file {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise RegistryPersistenceError(
                f"Registry file {self.path} must hold a JSON object, "
                f"got {type(document).__name__}"
            )

        table: dict[str, UserRecord] = {}
        for key, entry in document.items():
            try:
                record = UserRecord.from_document(key, entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise RegistryPersistenceError(
                    f"Invalid registry entry {key!r} in {self.path}: {e}"
                ) from e
            table[key.lower()] = record

        return table

    def _write_table(self, table: dict[str, UserRecord]) -> None:
        document = {key: record.to_document() for key, record in table.items()}
        payload = json.dumps(document, indent=2)

        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Error saving registry to {self.path}: {e}", exc_info=True)
            raise RegistryPersistenceError(f"Cannot write registry file {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Registry persisted: {self.path} ({len(table)} records)")

    def __repr__(self) -> str:
        return f"JsonRegistryStore(path={str(self.path)!r})"
