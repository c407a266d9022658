"""
Notekeeper Backend: Settings Tests
====================================

What:  Validators on the pydantic-settings model.
"""

import pytest
from pydantic import ValidationError

from notekeeper.config import Settings


def test_sync_driver_rejected():
    with pytest.raises(ValidationError, match="Unsupported database_url"):
        Settings(database_url="sqlite:///./notes.db")


def test_async_drivers_accepted():
    assert Settings(database_url="postgresql+asyncpg://u:p@db/notes").database_url.endswith("/notes")
    assert Settings(database_url="sqlite+aiosqlite://").database_url == "sqlite+aiosqlite://"


def test_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_cors_origins_list():
    settings = Settings(cors_origins="http://a.test, http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
