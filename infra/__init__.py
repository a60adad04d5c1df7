"""
Infrastructure module exports.

Configuration, logging and bootstrap for all service backends.
"""

from .config import InfraConfig, get_config, RegistryBackendType, LedgerBackendType, MessagingBackendType
from .bootstrap import InfraBootstrap, bootstrap_infrastructure
from .logging_setup import LOG_FORMAT, configure_logging

__all__ = [
    "InfraConfig",
    "get_config",
    "RegistryBackendType",
    "LedgerBackendType",
    "MessagingBackendType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
    "LOG_FORMAT",
    "configure_logging",
]
