"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from infra.bootstrap import InfraBootstrap  # noqa: E402


@pytest.fixture(autouse=True)
def reset_bootstrap():
    """Every test starts without a bootstrapped registry singleton."""
    InfraBootstrap.reset()
    yield
    InfraBootstrap.reset()
