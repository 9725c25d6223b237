"""Logging for the localvol plugin.

Driver code logs with ``extra={"event": LogEvent..., "volume": ...}``.
Both output formats carry that volume context:
- text: message followed by ``key=value`` pairs, for a terminal
- json: one object per line, for log aggregation
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger

from localvol.config import LoggingConfig

# Extras shown by the text formatter, in this order
CONTEXT_FIELDS = ("event", "operation", "volume", "volume_id", "mountpoint", "error_code")

# Never written out, even if a caller passes them as extras
REDACTED_FIELDS = ("passcode", "passcode_hash")
REDACTED = "***"


class RateLimitFilter(logging.Filter):
    """Drop repeats of the same volume event inside a time window.

    An orchestrator retrying a failing Mount or Unmount in a tight loop
    would otherwise write the same warning for every attempt. Records are
    keyed on logger, event, volume and error code, so distinct volumes
    failing the same way are still logged. ERROR and above always pass.
    """

    def __init__(
        self,
        rate_limit_seconds: float = 5.0,
        max_cache_size: int = 1000,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._rate_limit = rate_limit_seconds
        self._max_cache = max_cache_size
        self._seen: dict[tuple[str, ...], float] = {}

    @staticmethod
    def _key(record: logging.LogRecord) -> tuple[str, ...]:
        event = getattr(record, "event", None)
        return (
            record.name,
            str(event) if event is not None else record.getMessage(),
            str(getattr(record, "volume", "")),
            str(getattr(record, "error_code", "")),
        )

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            return True

        key = self._key(record)
        now = time.monotonic()
        last_time = self._seen.get(key)
        if last_time is not None and now - last_time < self._rate_limit:
            return False

        # Re-inserted keys move to the end: iteration order is oldest first
        self._seen.pop(key, None)
        self._seen[key] = now
        while len(self._seen) > self._max_cache:
            del self._seen[next(iter(self._seen))]
        return True


def _redact(values: dict[str, Any]) -> None:
    for field in REDACTED_FIELDS:
        if field in values:
            values[field] = REDACTED


class PluginTextFormatter(logging.Formatter):
    """``time - logger - LEVEL - message [event=... volume=...]``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = {
            field: getattr(record, field)
            for field in CONTEXT_FIELDS + REDACTED_FIELDS
            if getattr(record, field, None) not in (None, "")
        }
        _redact(context)
        if not context:
            return line
        pairs = " ".join(f"{field}={value}" for field, value in context.items())
        return f"{line} [{pairs}]"


class PluginJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines with service metadata and the volume context.

    Every line has timestamp (UTC, ISO 8601), level, logger, service and
    pid. ``event`` is written as the plain LogEvent value.
    """

    def __init__(self, config: LoggingConfig, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._service = config.service_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self._service
        log_record["pid"] = record.process

        event = log_record.get("event")
        if event is not None:
            log_record["event"] = str(event)
        _redact(log_record)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        log_record.pop("color_message", None)


def setup_logging(config: LoggingConfig) -> None:
    """Send application and uvicorn logs to stdout in the configured format."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.format == "json":
        formatter = PluginJsonFormatter(config)
    else:
        formatter = PluginTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RateLimitFilter(rate_limit_seconds=config.rate_limit_seconds))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in ("uvicorn", "uvicorn.error"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = False
        uv_logger.addHandler(handler)

    # The orchestrator polls Get/List constantly
    logging.getLogger("uvicorn.access").disabled = True
