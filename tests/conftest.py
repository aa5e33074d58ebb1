"""
Root pytest configuration for advanced-building.
"""

import pytest

# Auto-bootstrap logging for all tests
from advanced_building.build.config.logging import bootstrap_logging
bootstrap_logging()


@pytest.fixture(autouse=True)
def no_nuget_key(monkeypatch):
    """Never publish packages from tests unless a test asks for it."""
    monkeypatch.delenv("NUGET_KEY", raising=False)
    monkeypatch.delenv("BUILD_CONFIG", raising=False)
