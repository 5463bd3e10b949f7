"""Tests for settings loaded from the environment."""

import logging
from pathlib import Path

import pytest

from duke.config import DEFAULT_DATA_PATH, get_settings


class TestSettings:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("DUKE_DATA_PATH", "DUKE_TEMP_PATH", "DUKE_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = get_settings()

        assert settings.data_path == Path(DEFAULT_DATA_PATH)
        assert settings.temp_path == Path(DEFAULT_DATA_PATH + ".tmp")
        assert settings.log_level == logging.WARNING

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("DUKE_DATA_PATH", "/tmp/tasks.txt")
        monkeypatch.setenv("DUKE_TEMP_PATH", "/tmp/scratch.txt")
        monkeypatch.setenv("DUKE_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.data_path == Path("/tmp/tasks.txt")
        assert settings.temp_path == Path("/tmp/scratch.txt")
        assert settings.log_level == logging.DEBUG

    def test_numeric_log_level(self, monkeypatch):
        monkeypatch.setenv("DUKE_LOG_LEVEL", "20")
        assert get_settings().log_level == logging.INFO

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("DUKE_LOG_LEVEL", "chatty")
        assert get_settings().log_level == logging.WARNING

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("DUKE_DATA_PATH", "  ")
        assert get_settings().data_path == Path(DEFAULT_DATA_PATH)
