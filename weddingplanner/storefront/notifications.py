"""Transient user notifications (toasts)"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class Notification:
    level: str
    message: str


class Notifier:
    """Records every notification shown to the user and logs it"""

    def __init__(self):
        self.notifications: list[Notification] = []

    def _notify(self, level: str, message: str):
        self.notifications.append(Notification(level, message))
        logger.log(_LOG_LEVELS[level], f"[{level}] {message}")

    def info(self, message: str):
        self._notify("info", message)

    def success(self, message: str):
        self._notify("success", message)

    def warning(self, message: str):
        self._notify("warning", message)

    def error(self, message: str):
        self._notify("error", message)

    def messages(self, level: Optional[str] = None) -> list[str]:
        return [n.message for n in self.notifications if level is None or n.level == level]
