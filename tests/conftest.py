"""
Test configuration shared by all tests.

Every test runs with in-memory settings so no config.yaml is read or
written, and with the project root importable.
"""
import os
import sys
import pytest

# Add the project root directory to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from dns_inventory.settings import Settings, CONFIG_ENV_VAR

@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Reset the settings singleton and put it in test mode around each test."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    Settings._reset()
    Settings.set_test_mode()
    yield
    Settings._reset()
