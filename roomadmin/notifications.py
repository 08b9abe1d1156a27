"""Short-lived success/error banners shown to the operator."""
import itertools
import threading
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import List

from roomadmin.utils.session_window import Clock

SUCCESS = "success"
ERROR = "error"


@dataclass
class Notification:
    id: int
    message: str
    type: str
    created_at: datetime

    def to_dict(self):
        return asdict(self)


class NotificationCenter:
    def __init__(self, clock: Clock, ttl_seconds: int = 5):
        self.clock = clock
        self.ttl = timedelta(seconds=ttl_seconds)
        self._ids = itertools.count(1)
        self._items: List[Notification] = []
        self._lock = threading.Lock()

    def _prune(self):
        cutoff = self.clock.now() - self.ttl
        self._items = [n for n in self._items if n.created_at > cutoff]

    def push(self, message: str, type: str = SUCCESS) -> Notification:
        notification = Notification(next(self._ids), message, type, self.clock.now())
        with self._lock:
            self._prune()
            self._items.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.push(message, SUCCESS)

    def error(self, message: str) -> Notification:
        return self.push(message, ERROR)

    def active(self) -> List[Notification]:
        with self._lock:
            self._prune()
            return list(self._items)

    def __len__(self):
        with self._lock:
            return len(self._items)

    def dismiss(self, notification_id: int) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [n for n in self._items if n.id != notification_id]
            return len(self._items) != before
