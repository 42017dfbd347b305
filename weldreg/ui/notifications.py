"""Toast notifications raised by views."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Toast:
    severity: Severity
    summary: str
    detail: str
    life_ms: Optional[int] = None


class Notifier:
    """Capped queue of toasts in arrival order; the renderer drains them."""

    def __init__(self, max_items: int = 50) -> None:
        self.max_items = max_items
        self.messages: Deque[Toast] = deque(maxlen=max_items)

    def add(self, toast: Toast) -> None:
        logger.log(_LOG_LEVELS[toast.severity], "%s: %s", toast.summary, toast.detail)
        self.messages.append(toast)

    def success(self, detail: str, life_ms: Optional[int] = 3000) -> None:
        self.add(Toast(Severity.SUCCESS, "Success", detail, life_ms))

    def warn(self, detail: str) -> None:
        self.add(Toast(Severity.WARN, "Warning", detail))

    def error(self, detail: str) -> None:
        self.add(Toast(Severity.ERROR, "Error", detail))

    @property
    def last(self) -> Optional[Toast]:
        return self.messages[-1] if self.messages else None

    def drain(self) -> list[Toast]:
        messages = list(self.messages)
        self.messages.clear()
        return messages


__all__ = ["Notifier", "Severity", "Toast"]
