import logging
import threading

from roomadmin.services.status_message import StatusMessageService
from roomadmin.store.feed import DELETE, ChangeEvent, ChangeFeed

logger = logging.getLogger(__name__)


class StatusMessageReconciler:
    """Holds the single status banner row, or None."""

    table = "status_message"

    def __init__(self, status_messages: StatusMessageService, feed: ChangeFeed):
        self.status_messages = status_messages
        self.feed = feed
        self.error = None
        self._current = None
        self._lock = threading.Lock()
        self._subscription = None

    @property
    def current(self):
        with self._lock:
            return self._current

    def refresh(self) -> bool:
        data, error = self.status_messages.get_status_message()
        if error:
            self.error = error
            logger.warning(f"Refreshing status message failed: {error}")
            return False
        self.error = None
        with self._lock:
            self._current = data
        return True

    def mount(self):
        self._subscription = self.feed.subscribe(self.table, self.apply)
        self.refresh()

    def unmount(self):
        if self._subscription is not None:
            self.feed.unsubscribe(self._subscription)
            self._subscription = None

    def apply(self, event: ChangeEvent):
        with self._lock:
            if event.type == DELETE:
                if not self._current or self._current.get("id") == event.old.get("id"):
                    self._current = None
            else:
                self._current = event.new
