from __future__ import annotations

import pytest
from pydantic import ValidationError

from entry_dedup.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.db_file == "database.json"
    assert settings.strict_load is False
    assert settings.hash_preview_length == 16
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DB_FILE", " notes/log.json ")
    monkeypatch.setenv("STRICT_LOAD", "true")
    monkeypatch.setenv("HASH_PREVIEW_LENGTH", "8")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.db_file == "notes/log.json"
    assert settings.strict_load is True
    assert settings.hash_preview_length == 8
    assert settings.log_level == "DEBUG"


def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("DB_FILE=from_env_file.json\n", encoding="utf-8")
    assert Settings().db_file == "from_env_file.json"


def test_invalid_values(monkeypatch):
    monkeypatch.setenv("HASH_PREVIEW_LENGTH", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_empty_db_file_rejected(monkeypatch):
    monkeypatch.setenv("DB_FILE", "  ")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
