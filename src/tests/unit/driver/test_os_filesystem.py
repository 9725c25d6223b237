"""LocalDriver against the real disk under tmp_path."""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from localvol.driver import AccessGate, LocalDriver
from localvol.infra import OsFileSystem


@pytest.fixture
def disk_driver(tmp_path: Path, gate: AccessGate) -> LocalDriver:
    config = MagicMock()
    config.driver.root_dir = str(tmp_path)
    config.driver.dir_mode = 0o777
    return LocalDriver(config=config, fs=OsFileSystem(), gate=gate)


class TestOsFileSystem:
    def test_stat_missing_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            OsFileSystem().stat(str(tmp_path / "nope"))

    def test_remove_all_missing_path(self, tmp_path: Path) -> None:
        OsFileSystem().remove_all(str(tmp_path / "nope"))

    def test_remove_all_link_keeps_target(self, tmp_path: Path) -> None:
        fs = OsFileSystem()
        target = tmp_path / "target"
        fs.mkdir_all(str(target), 0o777)
        (target / "data.txt").write_text("keep me")
        link = tmp_path / "link"
        fs.symlink(str(target), str(link))

        fs.remove_all(str(link))

        assert not link.exists()
        assert (target / "data.txt").read_text() == "keep me"


class TestLocalDriverOnDisk:
    async def test_lifecycle(self, disk_driver: LocalDriver, tmp_path: Path) -> None:
        volume_dir = tmp_path / "_volumes" / "vid"
        mount_dir = tmp_path / "_mounts" / "vid"

        assert (await disk_driver.create("vol", {"volume_id": "vid"})).err == ""
        assert volume_dir.is_dir()

        mounted = await disk_driver.mount("vol")
        assert mounted.mountpoint == str(mount_dir)
        assert mount_dir.is_symlink()
        assert os.readlink(mount_dir) == str(volume_dir)

        (mount_dir / "hello.txt").write_text("hi")
        assert (volume_dir / "hello.txt").read_text() == "hi"

        assert (await disk_driver.unmount("vol")).err == ""
        assert not mount_dir.exists()
        assert (volume_dir / "hello.txt").exists()

        assert (await disk_driver.remove("vol")).err == ""
        assert not volume_dir.exists()

    async def test_externally_removed_link_is_reported(
        self, disk_driver: LocalDriver, tmp_path: Path
    ) -> None:
        await disk_driver.create("vol", {"volume_id": "vid"})
        mounted = await disk_driver.mount("vol")
        os.remove(mounted.mountpoint)

        response = await disk_driver.unmount("vol")

        assert "nothing to do!" in response.err
        assert (await disk_driver.get("vol")).volume.mountpoint == mounted.mountpoint

    async def test_remove_mounted_volume(self, disk_driver: LocalDriver, tmp_path: Path) -> None:
        await disk_driver.create("vol", {"volume_id": "vid"})
        await disk_driver.mount("vol")

        assert (await disk_driver.remove("vol")).err == ""

        assert not (tmp_path / "_mounts" / "vid").exists()
        assert not (tmp_path / "_volumes" / "vid").exists()
        assert (await disk_driver.list()).volumes == []

    async def test_volume_id_cannot_reach_outside_root(
        self, tmp_path: Path, gate: AccessGate
    ) -> None:
        config = MagicMock()
        config.driver.root_dir = str(tmp_path / "root")
        config.driver.dir_mode = 0o777
        driver = LocalDriver(config=config, fs=OsFileSystem(), gate=gate)
        victim = tmp_path / "victim"
        victim.mkdir()
        (victim / "precious.txt").write_text("keep me")

        for volume_id in (str(victim), "../../victim"):
            response = await driver.create("evil", {"volume_id": volume_id})
            assert response.err.startswith("Invalid 'volume_id' field in 'Opts'")
            assert (await driver.remove("evil")).err == "Volume 'evil' not found"

        assert (victim / "precious.txt").read_text() == "keep me"
        assert (await driver.list()).volumes == []
