"""Unit test environment helpers."""

import pytest

from common.config.designer import DEFAULT_DIALECT_ENV, STRICT_PARSE_ENV


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Run every unit test with default designer settings."""
    monkeypatch.delenv(DEFAULT_DIALECT_ENV, raising=False)
    monkeypatch.delenv(STRICT_PARSE_ENV, raising=False)
    yield
