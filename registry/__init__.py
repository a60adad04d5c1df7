"""
Registry module exports.

Name -> phone -> address mapping with reverse lookups by phone.
"""

from registry.base import RegistryPersistenceError, RegistryStore
from registry.json_store import DEFAULT_REGISTRY_PATH, JsonRegistryStore
from registry.stub import InMemoryRegistryStore
from registry.types import PublicUser, UserRecord

__all__ = [
    "RegistryStore",
    "RegistryPersistenceError",
    "JsonRegistryStore",
    "InMemoryRegistryStore",
    "DEFAULT_REGISTRY_PATH",
    "UserRecord",
    "PublicUser",
]
