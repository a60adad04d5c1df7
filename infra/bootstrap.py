"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the registry and collaborator clients from
configuration.
"""

import logging
from typing import Optional

from registry import RegistryStore
from services.ledger import LedgerClient
from services.messaging import MessagingClient

from .config import InfraConfig, get_config

logger = logging.getLogger(__name__)


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process, so every caller shares
    one registry store (and its write lock).
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.registry = self.config.create_registry_store()
        self.ledger = self.config.create_ledger_client()
        self.messaging = self.config.create_messaging_client()
        logger.info(f"Infrastructure bootstrapped: {self!r}")

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_registry(self) -> RegistryStore:
        return self.registry

    def get_ledger_client(self) -> LedgerClient:
        return self.ledger

    def get_messaging_client(self) -> MessagingClient:
        return self.messaging

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"InfraBootstrap(registry={self.config.registry_backend}, "
            f"ledger={self.config.ledger_backend}, "
            f"messaging={self.config.messaging_backend})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap the registry and collaborator clients.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with all backends initialized
    """
    return InfraBootstrap.get_instance(config)
