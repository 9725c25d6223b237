"""Prometheus metrics definitions for the localvol plugin.

Driver metrics track the volume lifecycle calls made by the orchestrator:
- per-operation latency and error counts
- snapshot gauges for the registry contents
"""

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Histogram Buckets
# =============================================================================
# Directory and symlink syscalls only; anything past a second is a sick disk
_BUCKETS_FAST = (
    0.0005, 0.001, 0.0025, 0.005, 0.01,
    0.025, 0.05, 0.1, 0.25, 0.5,
    1, 2.5,
)  # 12 buckets

OPERATIONS = ("create", "mount", "unmount", "path", "get", "list", "remove")

# =============================================================================
# Operation Metrics
# =============================================================================

LOCALVOL_OPERATION_DURATION = Histogram(
    "localvol_operation_duration_seconds",
    "Duration of volume driver operations",
    ["operation"],
    buckets=_BUCKETS_FAST,
)

LOCALVOL_OPERATION_ERRORS = Counter(
    "localvol_operation_errors_total",
    "Total volume driver operation errors",
    ["operation", "error_code"],
)

# =============================================================================
# Registry Snapshot Metrics
# =============================================================================

LOCALVOL_VOLUMES_TOTAL = Gauge(
    "localvol_volumes_total",
    "Number of volumes in the registry",
)

LOCALVOL_MOUNTED_VOLUMES_TOTAL = Gauge(
    "localvol_mounted_volumes_total",
    "Number of volumes with at least one outstanding mount",
)


def _init_metrics() -> None:
    """Initialize labeled metrics with zero values."""
    for op in OPERATIONS:
        LOCALVOL_OPERATION_DURATION.labels(operation=op)


_init_metrics()
