"""Local-disk volume driver."""

from localvol.driver.access import AccessGate
from localvol.driver.local import LocalDriver
from localvol.driver.mounts import MountCoordinator
from localvol.driver.paths import PathScheme
from localvol.driver.registry import VolumeRecord, VolumeRegistry

__all__ = [
    "LocalDriver",
    "AccessGate",
    "MountCoordinator",
    "PathScheme",
    "VolumeRecord",
    "VolumeRegistry",
]
