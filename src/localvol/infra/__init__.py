"""Plugin infrastructure layer."""

from localvol.infra.filesystem import FileSystem, OsFileSystem

__all__ = [
    "FileSystem",
    "OsFileSystem",
]
