"""
Unit tests for environment-driven settings.
"""

import pytest

from tracker.config.settings import DEFAULT_DATABASE_URL, Settings

ENV_KEYS = (
    "DATABASE_URL",
    "SYNC_BATCH_SIZE",
    "SYNC_BATCH_DELAY_MS",
    "PLATFORM_TIMEOUT_SECONDS",
    "SYNC_HOUR",
    "SYNC_MINUTE",
    "TIMEZONE",
    "ENVIRONMENT",
    "CODECHEF_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")


class TestSettingsLoad:
    def test_defaults(self):
        s = Settings.load()

        assert s.database_url == DEFAULT_DATABASE_URL
        assert s.sync_batch_size == 10
        assert s.sync_batch_delay_ms == 500
        assert s.sync_batch_delay_seconds == 0.5
        assert s.platform_timeout_seconds == 10.0
        assert s.timezone == "UTC"
        assert s.is_dev is False

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("SYNC_BATCH_SIZE", "25")
        monkeypatch.setenv("SYNC_BATCH_DELAY_MS", "0")
        monkeypatch.setenv("PLATFORM_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("CODECHEF_URL", "http://localhost:9000/")

        s = Settings.load()

        assert s.sync_batch_size == 25
        assert s.sync_batch_delay_ms == 0
        assert s.platform_timeout_seconds == 2.5
        assert s.is_dev is True
        assert s.codechef_url == "http://localhost:9000"

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("SYNC_BATCH_SIZE", "ten"),
            ("SYNC_BATCH_SIZE", "0"),
            ("SYNC_BATCH_DELAY_MS", "-5"),
            ("PLATFORM_TIMEOUT_SECONDS", "0"),
            ("SYNC_HOUR", "24"),
        ],
    )
    def test_invalid_values_fail_fast(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        with pytest.raises(RuntimeError):
            Settings.load()
