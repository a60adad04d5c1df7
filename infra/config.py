"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
All components default to the local, offline stack (JSON file + stubs).
"""

import os
from typing import Optional, Literal
from dataclasses import dataclass

from registry import InMemoryRegistryStore, JsonRegistryStore, RegistryStore
from services.ledger import LedgerClient, StubLedgerClient
from services.messaging import MessagingClient, StubMessagingClient, WhatsAppCloudMessagingClient


RegistryBackendType = Literal["json", "memory"]
LedgerBackendType = Literal["stub"]
MessagingBackendType = Literal["stub", "whatsapp"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # Registry
    registry_backend: RegistryBackendType
    registry_path: str

    # Ledger
    ledger_backend: LedgerBackendType

    # Messaging
    messaging_backend: MessagingBackendType
    whatsapp_access_token: Optional[str]
    whatsapp_phone_number_id: Optional[str]
    whatsapp_api_version: str

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - Registry: JSON file at ./data/name_mappings.json
        - Ledger: stub
        - Messaging: stub
        """
        return cls(
            registry_backend=os.getenv("REGISTRY_BACKEND", "json"),  # type: ignore
            registry_path=os.getenv("REGISTRY_PATH", "./data/name_mappings.json"),

            ledger_backend=os.getenv("LEDGER_BACKEND", "stub"),  # type: ignore

            messaging_backend=os.getenv("MESSAGING_BACKEND", "stub"),  # type: ignore
            whatsapp_access_token=os.getenv("WHATSAPP_ACCESS_TOKEN") or None,
            whatsapp_phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID") or None,
            whatsapp_api_version=os.getenv("WHATSAPP_API_VERSION", "v18.0"),

            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def create_registry_store(self) -> RegistryStore:
        """Create registry store based on configuration."""
        if self.registry_backend == "memory":
            return InMemoryRegistryStore()
        return JsonRegistryStore(self.registry_path)

    def create_ledger_client(self) -> LedgerClient:
        """Create ledger client based on configuration."""
        # Only the stub ships in this repository
        return StubLedgerClient()

    def create_messaging_client(self) -> MessagingClient:
        """Create messaging client based on configuration."""
        if self.messaging_backend == "whatsapp":
            return WhatsAppCloudMessagingClient(
                access_token=self.whatsapp_access_token,
                phone_number_id=self.whatsapp_phone_number_id,
                api_version=self.whatsapp_api_version,
            )
        return StubMessagingClient()


def get_config() -> InfraConfig:
    """Get global infrastructure configuration."""
    return InfraConfig.from_env()
