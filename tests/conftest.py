"""
Pytest configuration and shared fixtures for the log redaction tests.
"""

import os
import sys

import pytest

# Add parent directory to path for server imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

REDACTION_ENV_VARS = (
    "REDACTION_EXTRA_SENSITIVE_KEYS",
    "REDACTION_EXTRA_QUERY_KEYS",
    "REDACTION_LOAD_DEFAULT_PROFILE",
)


@pytest.fixture(autouse=True)
def clean_redaction_env(monkeypatch):
    """
    Clear redaction settings so a developer's .env never leaks into tests.
    This runs automatically before each test.
    """
    for name in REDACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def engine():
    """Return an engine with the default secret_store profile."""
    from log_redaction import RedactionEngine

    return RedactionEngine()


@pytest.fixture
def pem_certificate():
    """A syntactically PEM-armored certificate (content is not a real key)."""
    return (
        "-----BEGIN CERTIFICATE-----\n"
        "MIIBszCCAVmgAwIBAgIUFAKEFAKEFAKEFAKEFAKEFAKEFAKEwCgYIKoZIzj0EAwIw\n"
        "ZmFrZSBjZXJ0aWZpY2F0ZSBmb3IgdGVzdHM=\n"
        "-----END CERTIFICATE-----"
    )
