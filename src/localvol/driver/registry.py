"""In-memory volume registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from localvol.driver.errors import (
    FileSystemError,
    VolumeConflictError,
    VolumeIdInUseError,
    VolumeNotFoundError,
)
from localvol.driver.paths import PathScheme
from localvol.infra import FileSystem
from localvol.logging_schema import LogEvent

logger = logging.getLogger(__name__)


@dataclass
class VolumeRecord:
    """One logical volume.

    ``mountpoint`` is set on the first mount and cleared when the last
    holder unmounts; ``mount_count`` is the source of truth.
    """

    name: str
    volume_id: str
    passcode_hash: str | None = None
    mount_count: int = 0
    mountpoint: str = ""

    @property
    def mounted(self) -> bool:
        return self.mount_count > 0


class VolumeRegistry:
    """Authoritative mapping from volume name to VolumeRecord.

    Not thread-safe on its own; LocalDriver serializes access.
    """

    def __init__(self, fs: FileSystem, paths: PathScheme) -> None:
        self._fs = fs
        self._paths = paths
        self._records: dict[str, VolumeRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: str) -> bool:
        return name in self._records

    def create(
        self, name: str, volume_id: str, passcode_hash: str | None = None
    ) -> tuple[VolumeRecord, bool]:
        """Create volume ``name`` backed by ``volume_id``.

        Idempotent for an identical volume ID; the stored passcode is kept.

        Returns:
            (record, created) where created is False for the no-op case.

        Raises:
            VolumeConflictError: name exists with a different volume ID.
            VolumeIdInUseError: volume ID already backs another name.
            FileSystemError: backing directory could not be created.
        """
        existing = self._records.get(name)
        if existing is not None:
            if existing.volume_id != volume_id:
                raise VolumeConflictError(name)
            return existing, False

        # Each volume ID backs exactly one name
        for other in self._records.values():
            if other.volume_id == volume_id:
                raise VolumeIdInUseError(volume_id, other.name)

        try:
            volume_path = self._paths.volume_path(volume_id)
            self._fs.mkdir_all(volume_path, self._paths.dir_mode)
        except OSError as e:
            raise FileSystemError.from_os_error("creating volume directory", e) from e

        record = VolumeRecord(name=name, volume_id=volume_id, passcode_hash=passcode_hash)
        self._records[name] = record
        logger.info(
            "Volume created",
            extra={
                "event": LogEvent.VOLUME_CREATED,
                "volume": name,
                "volume_id": volume_id,
                "protected": passcode_hash is not None,
            },
        )
        return record, True

    def get(self, name: str) -> VolumeRecord:
        record = self._records.get(name)
        if record is None:
            raise VolumeNotFoundError()
        return record

    def find(self, name: str) -> VolumeRecord | None:
        return self._records.get(name)

    def records(self) -> list[VolumeRecord]:
        """All records in creation order."""
        return list(self._records.values())

    def purge(self, record: VolumeRecord) -> None:
        """Delete the backing directory and drop the record.

        The record must already be unmounted.
        """
        try:
            self._fs.remove_all(self._paths.volume_path(record.volume_id))
        except OSError as e:
            raise FileSystemError.from_os_error("removing volume directory", e) from e

        del self._records[record.name]
        logger.info(
            "Volume removed",
            extra={
                "event": LogEvent.VOLUME_REMOVED,
                "volume": record.name,
                "volume_id": record.volume_id,
            },
        )
