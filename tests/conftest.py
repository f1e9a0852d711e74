"""
Shared test fixtures.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BUSINESS_CALENDAR_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("BUSINESS_CALENDAR_"):
            monkeypatch.delenv(key, raising=False)
