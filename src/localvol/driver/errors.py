"""Error taxonomy for the volume driver.

Driver components raise these; the LocalDriver facade turns them into the
plugin protocol's ``Err`` string. The message is the compatibility contract
with callers, so it is passed through verbatim.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for driver operations."""

    INVALID_OPTIONS = "INVALID_OPTIONS"
    VOLUME_NOT_FOUND = "VOLUME_NOT_FOUND"
    VOLUME_CONFLICT = "VOLUME_CONFLICT"
    ACCESS_DENIED = "ACCESS_DENIED"
    MOUNT_STATE = "MOUNT_STATE"
    STALE_MOUNT = "STALE_MOUNT"
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"


class DriverError(Exception):
    """Base exception for driver operations.

    Attributes:
        code: The error code from ErrorCode enum.
        message: Message reported to the caller as ``Err``.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class InvalidOptionsError(DriverError):
    """Missing mandatory field or wrongly typed option."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_OPTIONS, message)


class VolumeNotFoundError(DriverError):
    """Operation targets a name absent from the registry."""

    def __init__(self, message: str = "Volume not found") -> None:
        super().__init__(ErrorCode.VOLUME_NOT_FOUND, message)


class VolumeConflictError(DriverError):
    """Create with a different volume ID for an existing name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            ErrorCode.VOLUME_CONFLICT,
            f"Volume '{name}' already exists with a different volume ID",
        )


class VolumeIdInUseError(DriverError):
    """Create with a volume ID already backing another name."""

    def __init__(self, volume_id: str, owner: str) -> None:
        super().__init__(
            ErrorCode.VOLUME_CONFLICT,
            f"Volume ID '{volume_id}' is already used by volume '{owner}'",
        )


class AccessDeniedError(DriverError):
    """Passcode missing or mismatched on mount."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.ACCESS_DENIED, message)


class MountStateError(DriverError):
    """Mount state does not allow the operation."""

    def __init__(self, message: str = "Volume not previously mounted") -> None:
        super().__init__(ErrorCode.MOUNT_STATE, message)


class StaleMountError(DriverError):
    """Mount point on disk disagrees with the registry."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.STALE_MOUNT, message)


class FileSystemError(DriverError):
    """Underlying filesystem call failed."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.FILESYSTEM_ERROR, message)

    @classmethod
    def from_os_error(cls, action: str, exc: OSError) -> "FileSystemError":
        return cls(f"Error {action}: {exc}")
