"""
In-process change feed.

Backends publish one ``ChangeEvent`` per changed row; reconcilers subscribe by
table name. Delivery is synchronous on the publishing thread and carries no
ordering guarantee across tables.
"""
import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"
EVENT_TYPES = (INSERT, UPDATE, DELETE)


@dataclass
class ChangeEvent:
    table: str
    type: str
    new: Dict[str, Any] = field(default_factory=dict)
    old: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unknown change event type: {self.type}")

    @property
    def row(self) -> Dict[str, Any]:
        """The row the event is about: new for inserts/updates, old for deletes."""
        return self.new or self.old

    @classmethod
    def from_webhook(cls, payload: Dict[str, Any]) -> "ChangeEvent":
        """Parse a database webhook body: ``type``, ``table``, ``record``, ``old_record``."""
        try:
            event_type = str(payload["type"]).upper()
            table = payload["table"]
        except KeyError as e:
            raise ValueError(f"Webhook payload missing field: {e}") from e
        return cls(
            table=table,
            type=event_type,
            new=payload.get("record") or {},
            old=payload.get("old_record") or {},
        )


Handler = Callable[[ChangeEvent], None]


@dataclass(frozen=True)
class Subscription:
    id: int
    table: str
    events: Optional[frozenset]


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._handlers: Dict[int, tuple] = {}

    def subscribe(self, table: str, handler: Handler, events=None) -> Subscription:
        subscription = Subscription(
            id=next(self._ids),
            table=table,
            events=frozenset(events) if events else None,
        )
        with self._lock:
            self._handlers[subscription.id] = (subscription, handler)
        logger.debug(f"Subscribed #{subscription.id} to {table} changes")
        return subscription

    def unsubscribe(self, subscription: Subscription):
        with self._lock:
            self._handlers.pop(subscription.id, None)
        logger.debug(f"Unsubscribed #{subscription.id} from {subscription.table} changes")

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return sum(1 for sub, _ in self._handlers.values() if sub.table == table)

    def publish(self, event: ChangeEvent):
        with self._lock:
            targets: List[tuple] = [
                (sub, handler)
                for sub, handler in self._handlers.values()
                if sub.table == event.table
                and (sub.events is None or event.type in sub.events)
            ]
        for sub, handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    f"Change handler #{sub.id} failed on {event.type} {event.table}"
                )
