"""Tests for plugin configuration."""

import os

import pytest

from localvol.config import DriverConfig, LoggingConfig, PluginConfig, ServerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove LOCALVOL_ env vars to ensure clean test environment."""
    for key in list(os.environ.keys()):
        if key.startswith("LOCALVOL_"):
            monkeypatch.delenv(key, raising=False)


class TestDriverConfig:
    def test_default_values(self):
        config = DriverConfig()
        assert config.root_dir == "/var/vcap/data/localvol"
        assert config.dir_mode == 0o777

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCALVOL_DRIVER_ROOT_DIR", "/srv/volumes")
        monkeypatch.setenv("LOCALVOL_DRIVER_DIR_MODE", "488")

        config = DriverConfig()

        assert config.root_dir == "/srv/volumes"
        assert config.dir_mode == 0o750


class TestServerConfig:
    def test_socket_path_empty_by_default(self):
        assert ServerConfig().socket_path == ""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCALVOL_SERVER_SOCKET_PATH", "/run/docker/plugins/localvol.sock")

        assert ServerConfig().socket_path == "/run/docker/plugins/localvol.sock"


class TestPluginConfig:
    def test_aggregates_sub_configs(self, monkeypatch):
        monkeypatch.setenv("LOCALVOL_LOGGING_FORMAT", "json")

        config = PluginConfig()

        assert config.logging.format == "json"
        assert config.driver.root_dir == "/var/vcap/data/localvol"


class TestLoggingConfig:
    def test_rate_limit_default(self):
        assert LoggingConfig().rate_limit_seconds == 5.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCALVOL_LOGGING_RATE_LIMIT_SECONDS", "0.5")

        assert LoggingConfig().rate_limit_seconds == 0.5
