"""JSON logging for the registry API and its client tooling.

Besides stdout, every record lands in a small in-memory ring buffer that the
``/api/logs`` endpoint serves newest-first.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

from weldreg.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s"

_configured = False
_recent: deque[dict[str, str]] = deque(maxlen=200)


class ServiceFilter(logging.Filter):
    """Stamps each record with the emitting service name."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        return True


class RecentLogHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            _recent.appendleft(
                {
                    "time": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                    "level": record.levelname,
                    "name": record.name,
                    "message": record.getMessage(),
                }
            )
        except Exception:
            self.handleError(record)


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """Route root logging through the JSON formatter; repeated calls are no-ops."""

    global _configured
    if _configured:
        return

    stream = logging.StreamHandler()
    stream.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    stream.addFilter(ServiceFilter(service_name or settings.service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream)
    root.addHandler(RecentLogHandler())
    root.setLevel((level or settings.log_level).upper())
    # SQL echo stays off unless asked for explicitly
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.captureWarnings(True)
    _configured = True


def get_log_buffer(limit: int = 100, level: Optional[str] = None) -> list[dict[str, str]]:
    """Newest-first buffered entries, optionally only those at ``level`` or above."""

    entries = list(_recent)
    if level:
        threshold = logging.getLevelName(level.upper())
        if isinstance(threshold, int):
            entries = [e for e in entries if logging.getLevelName(e["level"]) >= threshold]
    return entries[:limit]


__all__ = ["get_log_buffer", "setup_logging"]
