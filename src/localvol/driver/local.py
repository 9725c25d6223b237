"""LocalDriver: the volume plugin's lifecycle operations."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from localvol.config import PluginConfig, get_config
from localvol.driver.access import AccessGate
from localvol.driver.errors import (
    DriverError,
    InvalidOptionsError,
    MountStateError,
    VolumeNotFoundError,
)
from localvol.driver.mounts import MountCoordinator
from localvol.driver.options import VolumeOptions
from localvol.driver.paths import PathScheme
from localvol.driver.registry import VolumeRecord, VolumeRegistry
from localvol.driver.result import (
    ActivateResponse,
    CapabilitiesResponse,
    ErrorResponse,
    GetResponse,
    ListResponse,
    MountResponse,
    PathResponse,
    VolumeInfo,
)
from localvol.infra import FileSystem, OsFileSystem
from localvol.logging_schema import LogEvent
from localvol.metrics import (
    LOCALVOL_MOUNTED_VOLUMES_TOTAL,
    LOCALVOL_OPERATION_DURATION,
    LOCALVOL_OPERATION_ERRORS,
    LOCALVOL_VOLUMES_TOTAL,
)

logger = logging.getLogger(__name__)

VOLUME_DRIVER = "VolumeDriver"


class LocalDriver:
    """Volume driver managing directories on the local disk.

    Every operation runs under one process-wide lock, so the registry and
    the disk move together. Failures are returned, never raised: each
    response carries the message in ``err`` (empty on success).
    """

    def __init__(
        self,
        config: PluginConfig | None = None,
        fs: FileSystem | None = None,
        gate: AccessGate | None = None,
    ) -> None:
        self._config = config or get_config()
        self._fs = fs or OsFileSystem()
        self._paths = PathScheme(
            self._fs,
            self._config.driver.root_dir,
            self._config.driver.dir_mode,
        )
        self._gate = gate or AccessGate()
        self._lock = asyncio.Lock()

        self.registry = VolumeRegistry(self._fs, self._paths)
        self.mounts = MountCoordinator(self._fs, self._paths, self._gate)

    async def activate(self) -> ActivateResponse:
        return ActivateResponse(implements=[VOLUME_DRIVER])

    async def capabilities(self) -> CapabilitiesResponse:
        return CapabilitiesResponse()

    async def create(self, name: str, opts: Mapping[str, Any] | None = None) -> ErrorResponse:
        try:
            options = VolumeOptions(opts)
            volume_id = options.volume_id()
            passcode_hash = self._gate.protect(options)
            async with self._operation("create"):
                self.registry.create(name, volume_id, passcode_hash)
        except DriverError as e:
            return ErrorResponse(err=self._report("create", name, e))
        return ErrorResponse()

    async def mount(self, name: str, opts: Mapping[str, Any] | None = None) -> MountResponse:
        try:
            async with self._operation("mount"):
                record = self.registry.find(name)
                if record is None:
                    raise VolumeNotFoundError(
                        f"Volume '{name}' must be created before being mounted"
                    )
                mountpoint = self.mounts.mount(record, VolumeOptions(opts))
        except DriverError as e:
            return MountResponse(err=self._report("mount", name, e))
        return MountResponse(mountpoint=mountpoint)

    async def unmount(self, name: str) -> ErrorResponse:
        try:
            async with self._operation("unmount"):
                self.mounts.unmount(self._lookup(name))
        except DriverError as e:
            return ErrorResponse(err=self._report("unmount", name, e))
        return ErrorResponse()

    async def path(self, name: str) -> PathResponse:
        """Mount point of a mounted volume.

        An existing but unmounted volume is an error: there is no path to
        hand out until something mounts it.
        """
        try:
            async with self._operation("path"):
                record = self.registry.get(name)
                if not record.mounted:
                    raise MountStateError()
                mountpoint = record.mountpoint
        except DriverError as e:
            return PathResponse(err=self._report("path", name, e))
        return PathResponse(mountpoint=mountpoint)

    async def get(self, name: str) -> GetResponse:
        try:
            async with self._operation("get"):
                info = _volume_info(self.registry.get(name))
        except DriverError as e:
            return GetResponse(err=self._report("get", name, e))
        return GetResponse(volume=info)

    async def list(self) -> ListResponse:
        async with self._operation("list"):
            volumes = [_volume_info(record) for record in self.registry.records()]
        return ListResponse(volumes=volumes)

    async def remove(self, name: str) -> ErrorResponse:
        """Destroy a volume, unmounting it first regardless of holders."""
        try:
            if not name:
                raise InvalidOptionsError("Missing mandatory 'volume_name'")
            async with self._operation("remove"):
                record = self._lookup(name)
                self.mounts.force_unmount(record)
                self.registry.purge(record)
        except DriverError as e:
            return ErrorResponse(err=self._report("remove", name, e))
        return ErrorResponse()

    def _lookup(self, name: str) -> VolumeRecord:
        record = self.registry.find(name)
        if record is None:
            raise VolumeNotFoundError(f"Volume '{name}' not found")
        return record

    @asynccontextmanager
    async def _operation(self, operation: str) -> AsyncIterator[None]:
        """Serialize a registry operation and record its metrics."""
        start = time.perf_counter()
        async with self._lock:
            try:
                yield
            finally:
                LOCALVOL_VOLUMES_TOTAL.set(len(self.registry))
                LOCALVOL_MOUNTED_VOLUMES_TOTAL.set(
                    sum(1 for record in self.registry.records() if record.mounted)
                )
                LOCALVOL_OPERATION_DURATION.labels(operation=operation).observe(
                    time.perf_counter() - start
                )

    def _report(self, operation: str, name: str, exc: DriverError) -> str:
        logger.warning(
            "Volume operation failed",
            extra={
                "event": LogEvent.DRIVER_ERROR,
                "operation": operation,
                "volume": name,
                "error_code": exc.code.value,
                "error_message": exc.message,
            },
        )
        LOCALVOL_OPERATION_ERRORS.labels(
            operation=operation, error_code=exc.code.value
        ).inc()
        return exc.message


def _volume_info(record: VolumeRecord) -> VolumeInfo:
    return VolumeInfo(name=record.name, mountpoint=record.mountpoint)
