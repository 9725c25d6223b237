"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for the volume plugin.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.VOLUME_MOUNTED, ...})
    """

    # Application lifecycle
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # Volume lifecycle
    VOLUME_CREATED = "volume_created"
    VOLUME_MOUNTED = "volume_mounted"
    VOLUME_UNMOUNTED = "volume_unmounted"
    VOLUME_REMOVED = "volume_removed"

    # Disk state diverged from the registry
    STALE_MOUNT = "stale_mount"

    # Error events
    DRIVER_ERROR = "driver_error"
    UNHANDLED_EXCEPTION = "unhandled_exception"
