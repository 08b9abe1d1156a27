"""
Local list state kept in step with a remote table.

A full fetch replaces the list; change events are folded in one at a time.
Both paths write under the same lock and whichever finishes last wins; there
is no sequencing between a refresh and events that arrive while it runs.
"""
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from roomadmin.store.feed import DELETE, INSERT, UPDATE, ChangeEvent, ChangeFeed

logger = logging.getLogger(__name__)


class LiveList:
    table: str = ""
    # New rows go to the front (newest first) unless False.
    prepend = True
    # An update for a row we do not hold is added when it falls in scope.
    upsert_on_update = False

    def __init__(self, feed: ChangeFeed):
        self.feed = feed
        self.error: Optional[str] = None
        self.loaded = False
        self._rows: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        self._subscriptions = []

    def fetch(self) -> Tuple[Optional[List[Dict[str, Any]]], Optional[str]]:
        raise NotImplementedError

    def accepts(self, row: Dict[str, Any]) -> bool:
        """Whether a row belongs in this list at all."""
        return True

    def rows(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._rows)

    def get(self, row_id) -> Optional[Dict[str, Any]]:
        with self._lock:
            return next((row for row in self._rows if row.get("id") == row_id), None)

    def replace(self, rows: List[Dict[str, Any]]):
        with self._lock:
            self._rows = list(rows)
            self.loaded = True

    def refresh(self) -> bool:
        data, error = self.fetch()
        if error:
            self.error = error
            logger.warning(f"Refreshing {self.table} failed: {error}")
            return False
        self.error = None
        self.replace(data or [])
        logger.debug(f"Refreshed {self.table}: {len(data or [])} row(s)")
        return True

    def subscribe(self, table: str, handler, events=None):
        self._subscriptions.append(self.feed.subscribe(table, handler, events))

    def mount(self):
        # Subscribe before the first fetch so no event falls in between.
        self.subscribe(self.table, self.apply)
        self.refresh()

    def unmount(self):
        for subscription in self._subscriptions:
            self.feed.unsubscribe(subscription)
        self._subscriptions = []

    def apply(self, event: ChangeEvent):
        if event.type == INSERT:
            self._insert(event.new)
        elif event.type == UPDATE:
            self._update(event.new)
        elif event.type == DELETE:
            self._delete(event.old)

    def _insert(self, row):
        if not self.accepts(row):
            logger.debug(f"Ignoring new {self.table} row {row.get('id')}: out of scope")
            return
        with self._lock:
            if any(existing.get("id") == row.get("id") for existing in self._rows):
                logger.debug(f"Ignoring duplicate {self.table} row {row.get('id')}")
                return
            if self.prepend:
                self._rows.insert(0, row)
            else:
                self._rows.append(row)

    def _update(self, row):
        in_scope = self.accepts(row)
        with self._lock:
            index = next(
                (i for i, existing in enumerate(self._rows) if existing.get("id") == row.get("id")),
                None,
            )
            if index is None:
                if not (self.upsert_on_update and in_scope):
                    logger.debug(f"Ignoring update for unlisted {self.table} row {row.get('id')}")
                    return
                if self.prepend:
                    self._rows.insert(0, row)
                else:
                    self._rows.append(row)
            elif in_scope:
                self._rows[index] = row
            else:
                del self._rows[index]

    def _delete(self, row):
        with self._lock:
            self._rows = [existing for existing in self._rows if existing.get("id") != row.get("id")]
