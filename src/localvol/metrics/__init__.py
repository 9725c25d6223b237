"""Prometheus metrics for the localvol plugin."""

from localvol.metrics.collector import (
    LOCALVOL_MOUNTED_VOLUMES_TOTAL,
    LOCALVOL_OPERATION_DURATION,
    LOCALVOL_OPERATION_ERRORS,
    LOCALVOL_VOLUMES_TOTAL,
)

__all__ = [
    "LOCALVOL_OPERATION_DURATION",
    "LOCALVOL_OPERATION_ERRORS",
    "LOCALVOL_VOLUMES_TOTAL",
    "LOCALVOL_MOUNTED_VOLUMES_TOTAL",
]
