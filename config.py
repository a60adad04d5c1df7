"""
Configuration management for the ChatterPay relay core.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the relay core."""

    # Registry
    REGISTRY_PATH = os.getenv("REGISTRY_PATH", "./data/name_mappings.json")

    # Backends
    LEDGER_BACKEND = os.getenv("LEDGER_BACKEND", "stub")
    MESSAGING_BACKEND = os.getenv("MESSAGING_BACKEND", "stub")

    # WhatsApp Cloud API
    WHATSAPP_ACCESS_TOKEN = os.getenv("WHATSAPP_ACCESS_TOKEN", "")
    WHATSAPP_PHONE_NUMBER_ID = os.getenv("WHATSAPP_PHONE_NUMBER_ID", "")
    WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v18.0")

    # Logging / environment
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = []
        if cls.MESSAGING_BACKEND == "whatsapp":
            required += ["WHATSAPP_ACCESS_TOKEN", "WHATSAPP_PHONE_NUMBER_ID"]
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env file")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Registry Path: {Config.REGISTRY_PATH}")
    print(f"  Ledger Backend: {Config.LEDGER_BACKEND}")
    print(f"  Messaging Backend: {Config.MESSAGING_BACKEND}")
    print(f"  WhatsApp Token: {'✓ Set' if Config.WHATSAPP_ACCESS_TOKEN else '✗ Missing'}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
