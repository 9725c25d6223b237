"""Unit tests for MountCoordinator."""

import asyncio
from unittest.mock import MagicMock

import pytest

from localvol.driver import AccessGate, LocalDriver, MountCoordinator, PathScheme, VolumeRecord
from localvol.driver.errors import (
    ErrorCode,
    FileSystemError,
    MountStateError,
    StaleMountError,
)
from localvol.driver.options import VolumeOptions

MOUNT_DIR = "/path/to/mount/_mounts/id-1"


class TestMountCoordinator:
    """Tests for MountCoordinator."""

    @pytest.fixture
    def coordinator(
        self, fake_fs: MagicMock, paths: PathScheme, gate: AccessGate
    ) -> MountCoordinator:
        return MountCoordinator(fake_fs, paths, gate)

    @pytest.fixture
    def record(self) -> VolumeRecord:
        return VolumeRecord(name="vol", volume_id="id-1")

    def test_mount_unmount_cycle(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        for _ in range(2):
            assert coordinator.mount(record, VolumeOptions()) == MOUNT_DIR
            assert record.mounted is True
            coordinator.unmount(record)
            assert record.mounted is False
            assert record.mountpoint == ""

        assert fake_fs.symlink.call_count == 2
        assert fake_fs.remove_all.call_count == 2

    def test_unmount_checks_recorded_mountpoint(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        coordinator.mount(record, VolumeOptions())

        coordinator.unmount(record)

        fake_fs.stat.assert_called_once_with(MOUNT_DIR)

    def test_unmount_unmounted(self, coordinator: MountCoordinator, record: VolumeRecord) -> None:
        with pytest.raises(MountStateError):
            coordinator.unmount(record)

        assert record.mount_count == 0

    def test_stale_mount_leaves_state(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        coordinator.mount(record, VolumeOptions())
        coordinator.mount(record, VolumeOptions())
        before = (record.mount_count, record.mountpoint)
        fake_fs.stat.side_effect = FileNotFoundError()

        with pytest.raises(StaleMountError) as exc_info:
            coordinator.unmount(record)

        assert exc_info.value.code == ErrorCode.STALE_MOUNT
        assert (record.mount_count, record.mountpoint) == before

    def test_remove_failure_keeps_last_mount(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        coordinator.mount(record, VolumeOptions())
        fake_fs.remove_all.side_effect = OSError("busy")

        with pytest.raises(FileSystemError):
            coordinator.unmount(record)

        assert record.mount_count == 1
        assert record.mountpoint == MOUNT_DIR

    def test_force_unmount(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        for _ in range(3):
            coordinator.mount(record, VolumeOptions())

        coordinator.force_unmount(record)

        fake_fs.remove_all.assert_called_once_with(MOUNT_DIR)
        fake_fs.stat.assert_not_called()
        assert record.mount_count == 0
        assert record.mountpoint == ""

    def test_force_unmount_unmounted_is_noop(
        self, coordinator: MountCoordinator, record: VolumeRecord, fake_fs: MagicMock
    ) -> None:
        coordinator.force_unmount(record)

        fake_fs.remove_all.assert_not_called()


class TestConcurrentMounts:
    """Overlapping lifecycle calls through the driver lock."""

    async def test_refcount_survives_concurrent_calls(
        self, driver: LocalDriver, fake_fs: MagicMock
    ) -> None:
        await driver.create("shared", {"volume_id": "id-1"})

        mounts = await asyncio.gather(*[driver.mount("shared") for _ in range(10)])
        assert all(r.err == "" for r in mounts)
        assert driver.registry.get("shared").mount_count == 10
        fake_fs.symlink.assert_called_once()

        unmounts = await asyncio.gather(*[driver.unmount("shared") for _ in range(10)])
        assert all(r.err == "" for r in unmounts)
        assert driver.registry.get("shared").mount_count == 0
        fake_fs.remove_all.assert_called_once_with(MOUNT_DIR)

    async def test_racing_creates_make_one_record(self, driver: LocalDriver) -> None:
        results = await asyncio.gather(
            *[driver.create("vol", {"volume_id": "id-1"}) for _ in range(5)]
        )

        assert all(r.err == "" for r in results)
        assert len(driver.registry) == 1
