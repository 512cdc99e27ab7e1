"""Pytest configuration and fixtures for unique-rule tests."""

import pytest

# Add the project root to the Python path
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import unique_rule.config as config_module


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Start every test from default settings, unaffected by the caller's environment."""
    for name in ("MISSING_PATH_POLICY", "LOG_LEVEL", "LOG_FORMAT", "MAX_JSON_OUTPUT_LENGTH", "MAX_REPORTED_VIOLATIONS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(project_root)
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def users():
    """Users keyed by email, the last one duplicating the first."""
    return [
        {"name": "John Doe", "email": "john@example.com"},
        {"name": "Jane Smith", "email": "jane@example.com"},
        {"name": "Bob Wilson", "email": "john@example.com"},
    ]


@pytest.fixture
def orders():
    """Orders with a nested customer record."""
    return [
        {"customer": {"email": "john@example.com"}, "total": 100.00},
        {"customer": {"email": "jane@example.com"}, "total": 150.00},
        {"customer": {"email": "john@example.com"}, "total": 75.00},
    ]


class Account:
    """Object-like item exposing its email through a getter."""

    def __init__(self, email, active=True):
        self._email = email
        self._active = active

    def getEmail(self):
        return self._email

    def is_active(self):
        return self._active


@pytest.fixture
def accounts():
    return [
        Account("user1@example.com"),
        Account("user2@example.com"),
        Account("user1@example.com"),
    ]
