"""Mount/unmount state machine for volume records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localvol.driver.access import AccessGate
from localvol.driver.errors import FileSystemError, MountStateError, StaleMountError
from localvol.driver.options import VolumeOptions
from localvol.driver.paths import PathScheme
from localvol.infra import FileSystem
from localvol.logging_schema import LogEvent

if TYPE_CHECKING:
    from localvol.driver.registry import VolumeRecord

logger = logging.getLogger(__name__)


class MountCoordinator:
    """Reference-counted mounts backed by one symlink per volume.

    States: Unmounted (mount_count == 0) -> Mounted(n) (mount_count == n).
    The symlink is created on 0 -> 1 and removed on 1 -> 0; in between only
    the counter moves.
    """

    def __init__(self, fs: FileSystem, paths: PathScheme, gate: AccessGate) -> None:
        self._fs = fs
        self._paths = paths
        self._gate = gate

    def mount(self, record: VolumeRecord, opts: VolumeOptions) -> str:
        """Add a mount holder and return the mount point."""
        self._gate.check(record.name, record.passcode_hash, opts)

        if record.mount_count < 1:
            try:
                mount_path = self._paths.mount_path(record.volume_id)
                self._fs.symlink(self._paths.volume_path(record.volume_id), mount_path)
            except OSError as e:
                raise FileSystemError.from_os_error("mounting volume", e) from e
            record.mountpoint = mount_path

        record.mount_count += 1
        logger.info(
            "Volume mounted",
            extra={
                "event": LogEvent.VOLUME_MOUNTED,
                "volume": record.name,
                "mountpoint": record.mountpoint,
                "mount_count": record.mount_count,
            },
        )
        return record.mountpoint

    def unmount(self, record: VolumeRecord) -> None:
        """Release one mount holder.

        The mount point is looked up first; if it is gone or cannot be
        checked the record is left exactly as it was.

        Raises:
            MountStateError: no outstanding mount.
            StaleMountError: mount point missing or unreadable on disk.
            FileSystemError: symlink removal failed.
        """
        if record.mount_count < 1:
            raise MountStateError()

        try:
            self._fs.stat(record.mountpoint)
        except FileNotFoundError:
            logger.warning(
                "Mount point missing on disk",
                extra={
                    "event": LogEvent.STALE_MOUNT,
                    "volume": record.name,
                    "mountpoint": record.mountpoint,
                },
            )
            raise StaleMountError(
                f"Volume {record.name} does not exist (path: {record.mountpoint}), nothing to do!"
            ) from None
        except OSError as e:
            raise StaleMountError("Error establishing whether volume exists") from e

        if record.mount_count == 1:
            self._remove_link(record)
        record.mount_count -= 1
        if record.mount_count == 0:
            record.mountpoint = ""

        logger.info(
            "Volume unmounted",
            extra={
                "event": LogEvent.VOLUME_UNMOUNTED,
                "volume": record.name,
                "mount_count": record.mount_count,
            },
        )

    def force_unmount(self, record: VolumeRecord) -> None:
        """Drop every mount holder at once, removing the symlink."""
        if not record.mounted:
            return

        self._remove_link(record)
        logger.info(
            "Volume force-unmounted",
            extra={
                "event": LogEvent.VOLUME_UNMOUNTED,
                "volume": record.name,
                "released": record.mount_count,
            },
        )
        record.mount_count = 0
        record.mountpoint = ""

    def _remove_link(self, record: VolumeRecord) -> None:
        try:
            self._fs.remove_all(record.mountpoint)
        except OSError as e:
            raise FileSystemError.from_os_error("unmounting volume", e) from e
