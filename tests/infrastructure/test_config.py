"""Tests for environment-based settings."""

import logging
from pathlib import Path

import pytest

from ordertrack.infrastructure.config import (
    ConfigurationError,
    Settings,
    load_settings,
    parse_log_level,
)
from ordertrack.infrastructure.ingestion.watcher import WatchMode


class TestLoadSettings:

    def test_defaults(self):
        assert load_settings({}) == Settings()

    def test_reads_prefixed_variables(self):
        settings = load_settings({
            "ORDERTRACK_UPLOADS_DIR": "/srv/uploads",
            "ORDERTRACK_DATA_DIR": "/srv/state",
            "ORDERTRACK_WATCH_MODE": "Polling",
            "ORDERTRACK_POLL_INTERVAL": "0.5",
            "ORDERTRACK_SETTLE_DELAY": "0",
            "ORDERTRACK_LOG_LEVEL": "debug",
            "ORDERTRACK_LOG_FILE": "/var/log/ordertrack.log",
        })
        assert settings.uploads_dir == Path("/srv/uploads")
        assert settings.data_dir == Path("/srv/state")
        assert settings.watch_mode is WatchMode.POLLING
        assert settings.poll_interval == 0.5
        assert settings.settle_delay == 0.0
        assert settings.log_level == logging.DEBUG
        assert settings.log_file == Path("/var/log/ordertrack.log")

    def test_blank_values_use_defaults(self):
        assert load_settings({"ORDERTRACK_UPLOADS_DIR": "  "}).uploads_dir == Path("uploads")

    @pytest.mark.parametrize(
        "name, value",
        [
            ("ORDERTRACK_WATCH_MODE", "inotify"),
            ("ORDERTRACK_POLL_INTERVAL", "0"),
            ("ORDERTRACK_POLL_INTERVAL", "fast"),
            ("ORDERTRACK_SETTLE_DELAY", "-1"),
            ("ORDERTRACK_LOG_LEVEL", "LOUD"),
        ],
    )
    def test_invalid_values_rejected(self, name, value):
        with pytest.raises(ConfigurationError):
            load_settings({name: value})


class TestParseLogLevel:

    def test_none_keeps_default(self):
        assert parse_log_level(None, logging.WARNING) == logging.WARNING

    def test_case_insensitive(self):
        assert parse_log_level("warning") == logging.WARNING
