"""Physical path layout for volumes."""

import os

from localvol.driver.errors import InvalidOptionsError
from localvol.infra import FileSystem

VOLUMES_ROOT_DIR = "_volumes"
MOUNTS_ROOT_DIR = "_mounts"


class PathScheme:
    """Canonical locations for a volume under the configured root.

    Each derivation resolves the root and makes sure the matching root
    directory exists before handing out a per-volume path. A per-volume
    path is always a direct child of its root.
    """

    def __init__(self, fs: FileSystem, root_dir: str, dir_mode: int = 0o777) -> None:
        self._fs = fs
        self._root_dir = root_dir
        self._dir_mode = dir_mode

    @property
    def dir_mode(self) -> int:
        return self._dir_mode

    def volume_path(self, volume_id: str) -> str:
        """Persistent backing directory: <root>/_volumes/<volume_id>."""
        return self._child(self._ensure_root(VOLUMES_ROOT_DIR), volume_id)

    def mount_path(self, volume_id: str) -> str:
        """Mount point exposed to consumers: <root>/_mounts/<volume_id>."""
        return self._child(self._ensure_root(MOUNTS_ROOT_DIR), volume_id)

    def _ensure_root(self, sub_dir: str) -> str:
        root = os.path.join(self._fs.abs(self._root_dir), sub_dir)
        self._fs.mkdir_all(root, self._dir_mode)
        return root

    @staticmethod
    def _child(root: str, volume_id: str) -> str:
        path = os.path.join(root, volume_id)
        if os.path.dirname(os.path.normpath(path)) != os.path.normpath(root):
            raise InvalidOptionsError(f"Volume ID '{volume_id}' escapes {root}")
        return path
