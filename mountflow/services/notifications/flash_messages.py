import logging
from collections import deque
from typing import Deque, List, Optional

from ...models import Notification, NotificationLevel
from .base_sink import NotificationSink


class FlashMessageService(NotificationSink):
    """Keeps the most recent notifications in memory and logs each one."""

    def __init__(self, max_notifications: int = 50):
        self._messages: Deque[Notification] = deque(maxlen=max_notifications)

    def success(self, message: str) -> None:
        self._add(NotificationLevel.SUCCESS, message)
        logging.info(message, extra={"operation": "flash_success"})

    def danger(self, message: str) -> None:
        self._add(NotificationLevel.DANGER, message)
        logging.warning(message, extra={"operation": "flash_danger"})

    def _add(self, level: NotificationLevel, message: str) -> None:
        self._messages.append(Notification(level=level, message=message))

    def get_recent(self, level: Optional[NotificationLevel] = None) -> List[Notification]:
        """Newest last."""
        if level is None:
            return list(self._messages)
        return [n for n in self._messages if n.level == level]

    def clear(self) -> None:
        self._messages.clear()
