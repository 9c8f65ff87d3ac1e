# notifier - bounded queue of toast notifications
# stores and routers push here, the frontend drains via /notifications

import logging
from collections import deque

from neuromate.config import settings
from neuromate.models.notification import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """fifo of pending notifications. oldest are dropped when the backlog is full."""

    def __init__(self, maxlen: int | None = None):
        self._queue: deque[Notification] = deque(
            maxlen=settings.NOTIFICATION_BACKLOG if maxlen is None else maxlen
        )

    def push(self, title: str, description: str = "", variant: str = "default") -> Notification:
        notification = Notification(variant=variant, title=title, description=description)
        self._queue.append(notification)
        logger.debug(f"Notification queued: {title}")
        return notification

    def error(self, title: str, description: str = "") -> Notification:
        """queue a destructive notification"""
        return self.push(title, description, variant="destructive")

    def pending(self) -> list[Notification]:
        return list(self._queue)

    def drain(self) -> list[Notification]:
        """return and clear all pending notifications"""
        items = list(self._queue)
        self._queue.clear()
        return items

    def __len__(self) -> int:
        return len(self._queue)
