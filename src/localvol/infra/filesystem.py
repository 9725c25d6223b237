"""Filesystem capability consumed by the volume driver.

The driver never touches ``os`` directly; every directory, symlink and
existence check goes through a ``FileSystem`` so tests can swap in a fake.
"""

import os
import shutil
from typing import Protocol


class FileSystem(Protocol):
    """Filesystem operations needed by the volume driver."""

    def abs(self, path: str) -> str:
        """Resolve path to an absolute path."""
        ...

    def mkdir_all(self, path: str, mode: int) -> None:
        """Create path and any missing parents. Existing directories are fine."""
        ...

    def symlink(self, target: str, link_path: str) -> None:
        """Create link_path pointing at target."""
        ...

    def stat(self, path: str) -> os.stat_result:
        """Stat path.

        Raises:
            FileNotFoundError: path does not exist.
            OSError: any other failure.
        """
        ...

    def remove_all(self, path: str) -> None:
        """Remove path and everything below it. Missing paths are fine."""
        ...


class OsFileSystem:
    """FileSystem backed by the local disk."""

    def abs(self, path: str) -> str:
        return os.path.abspath(path)

    def mkdir_all(self, path: str, mode: int) -> None:
        os.makedirs(path, mode=mode, exist_ok=True)

    def symlink(self, target: str, link_path: str) -> None:
        os.symlink(target, link_path)

    def stat(self, path: str) -> os.stat_result:
        # lstat: a dangling mount link still counts as present
        return os.lstat(path)

    def remove_all(self, path: str) -> None:
        if os.path.islink(path) or os.path.isfile(path):
            os.remove(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
