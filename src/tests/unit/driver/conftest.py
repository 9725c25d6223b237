"""Fixtures for driver unit tests."""

from unittest.mock import MagicMock

import pytest
from argon2 import PasswordHasher

from localvol.driver import AccessGate, LocalDriver, PathScheme
from localvol.infra import OsFileSystem

ROOT_DIR = "/path/to/mount"


@pytest.fixture
def fake_fs() -> MagicMock:
    """FileSystem fake: every call succeeds, abs resolves to ROOT_DIR."""
    fs = MagicMock(spec=OsFileSystem)
    fs.abs.return_value = ROOT_DIR + "/"
    return fs


@pytest.fixture
def mock_plugin_config() -> MagicMock:
    """Mock PluginConfig for testing."""
    config = MagicMock()
    config.driver = MagicMock()
    config.driver.root_dir = ROOT_DIR
    config.driver.dir_mode = 0o777
    return config


@pytest.fixture
def gate() -> AccessGate:
    """AccessGate with cheap Argon2 parameters."""
    return AccessGate(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def paths(fake_fs: MagicMock) -> PathScheme:
    return PathScheme(fake_fs, ROOT_DIR)


@pytest.fixture
def driver(
    mock_plugin_config: MagicMock,
    fake_fs: MagicMock,
    gate: AccessGate,
) -> LocalDriver:
    """LocalDriver wired to the fake filesystem."""
    return LocalDriver(config=mock_plugin_config, fs=fake_fs, gate=gate)
