"""API dependencies for dependency injection."""

from localvol.driver import LocalDriver

# Singleton driver instance; the registry lives as long as the process
_driver: LocalDriver | None = None


def init_driver() -> None:
    """Initialize driver singleton.

    Must be called during app startup.
    """
    global _driver
    _driver = LocalDriver()


def get_driver() -> LocalDriver:
    """Get driver singleton.

    Returns:
        LocalDriver instance shared across all API endpoints.

    Raises:
        RuntimeError: If called before init_driver().
    """
    if _driver is None:
        raise RuntimeError("Driver not initialized. Call init_driver() first.")
    return _driver


def reset_driver() -> None:
    """Reset driver singleton (for testing)."""
    global _driver
    _driver = None
