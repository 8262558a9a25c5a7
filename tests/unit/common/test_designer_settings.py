"""Unit tests for designer settings and typed env helpers."""

import logging

import pytest

from common.config.designer import DesignerSettings, get_settings
from common.config.env import get_env_bool, get_env_str


def test_defaults_without_environment():
    """Unset variables give the PostgreSQL lenient defaults."""
    settings = get_settings()
    assert settings.default_dialect == "postgresql"
    assert settings.strict_parse is False


def test_settings_read_from_environment(monkeypatch):
    """Both variables are picked up."""
    monkeypatch.setenv("SCHEMA_DESIGNER_DEFAULT_DIALECT", " mysql-like ")
    monkeypatch.setenv("SCHEMA_DESIGNER_STRICT_PARSE", "yes")
    settings = DesignerSettings.from_env()
    assert settings.default_dialect == "mysql-like"
    assert settings.strict_parse is True


def test_blank_dialect_uses_default(monkeypatch):
    """An empty dialect variable falls back to postgresql."""
    monkeypatch.setenv("SCHEMA_DESIGNER_DEFAULT_DIALECT", "   ")
    assert DesignerSettings.from_env().default_dialect == "postgresql"


def test_invalid_strict_flag_logs_and_disables(monkeypatch, caplog):
    """A non-boolean strict flag is ignored with a warning."""
    monkeypatch.setenv("SCHEMA_DESIGNER_STRICT_PARSE", "sometimes")
    with caplog.at_level(logging.WARNING, logger="common.config.designer"):
        settings = DesignerSettings.from_env()
    assert settings.strict_parse is False
    assert "SCHEMA_DESIGNER_STRICT_PARSE" in caplog.text


def test_settings_are_frozen():
    """Settings snapshots cannot be mutated."""
    settings = DesignerSettings()
    with pytest.raises(Exception):
        settings.strict_parse = True


def test_env_helpers(monkeypatch):
    """get_env_str/get_env_bool parse, default and require values."""
    monkeypatch.setenv("SD_TEST_FLAG", "Off")
    monkeypatch.delenv("SD_TEST_MISSING", raising=False)
    assert get_env_bool("SD_TEST_FLAG") is False
    assert get_env_bool("SD_TEST_MISSING", True) is True
    assert get_env_str("SD_TEST_MISSING", "fallback") == "fallback"
    with pytest.raises(KeyError):
        get_env_str("SD_TEST_MISSING", required=True)
    monkeypatch.setenv("SD_TEST_FLAG", "maybe")
    with pytest.raises(ValueError):
        get_env_bool("SD_TEST_FLAG")
