"""Keeps rooms.current_users following participation activity."""
import logging

from roomadmin.services.rooms import RoomService
from roomadmin.store.feed import DELETE, INSERT, UPDATE, ChangeEvent, ChangeFeed

logger = logging.getLogger(__name__)


def is_occupying(participation) -> bool:
    return (participation.get("rewards_left") or 0) > 0


def occupancy_delta(event: ChangeEvent) -> int:
    """+1, -1 or 0 for a participation change."""
    if event.type == INSERT:
        return 1 if is_occupying(event.new) else 0

    if event.type == UPDATE:
        # Moving a participation between rooms is not tracked.
        if event.old.get("room_id") != event.new.get("room_id"):
            return 0
        was, now = is_occupying(event.old), is_occupying(event.new)
        if was and not now:
            return -1
        if now and not was:
            return 1
        return 0

    if event.type == DELETE:
        return -1 if is_occupying(event.old) else 0
    return 0


class OccupancyUpdater:
    table = "user_sessions"

    def __init__(self, rooms: RoomService, feed: ChangeFeed):
        self.rooms = rooms
        self.feed = feed
        self._subscription = None

    def mount(self):
        self._subscription = self.feed.subscribe(self.table, self.apply)

    def unmount(self):
        if self._subscription is not None:
            self.feed.unsubscribe(self._subscription)
            self._subscription = None

    def apply(self, event: ChangeEvent):
        room_id = event.row.get("room_id")
        if not room_id:
            return
        delta = occupancy_delta(event)
        if not delta:
            return
        _, error = self.rooms.adjust_occupancy(room_id, delta)
        if error:
            # No retry; the counter stays off until something rewrites it.
            logger.error(f"Failed to update room {room_id} user count: {error}")
