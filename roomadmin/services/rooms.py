import logging

from roomadmin.services.results import store_call
from roomadmin.store.base import MISSING_PROCEDURE, Store, StoreError

logger = logging.getLogger(__name__)

ROOM_FIELDS = (
    "name",
    "description",
    "url",
    "max_users",
    "price_inr",
    "session_date",
    "session_start_time",
    "session_end_time",
)

OCCUPANCY_PROCEDURE = "adjust_room_occupancy"


class RoomService:
    table = "rooms"

    def __init__(self, store: Store, atomic_occupancy: bool = True):
        self.store = store
        self.atomic_occupancy = atomic_occupancy

    @store_call("fetching rooms")
    def list_for_date(self, session_date):
        logger.debug(f"Loading rooms for {session_date}")
        return self.store.select(
            self.table,
            {"session_date": session_date},
            order_by="created_at",
            descending=True,
        )

    @store_call("fetching room history")
    def list_history(self):
        return self.store.select(self.table, order_by="created_at", descending=True)

    @store_call("fetching room")
    def get_room(self, room_id):
        return self.store.select_one(self.table, {"id": room_id})

    @store_call("adding room")
    def add_room(self, room):
        row = {field: room.get(field) for field in ROOM_FIELDS}
        row["current_users"] = 0
        return self.store.insert(self.table, row)

    @store_call("updating room")
    def update_room(self, room_id, room):
        values = {field: room[field] for field in ROOM_FIELDS if field in room}
        return self.store.update(self.table, values, {"id": room_id})

    @store_call("deleting room")
    def delete_room(self, room_id):
        # Participation rows reference the room; they go first.
        self.store.delete("user_sessions", {"room_id": room_id})
        self.store.delete(self.table, {"id": room_id})
        return True

    @store_call("adjusting room occupancy")
    def adjust_occupancy(self, room_id, delta):
        """
        Apply +1/-1 to a room's occupancy, never going below zero.

        The atomic path runs one remote procedure. When the store has no such
        procedure the service switches to read-modify-write for good. That path
        reads then writes without a version check, so concurrent deltas on the
        same room can overwrite each other (last write wins).
        """
        if self.atomic_occupancy:
            try:
                count = self.store.rpc(
                    OCCUPANCY_PROCEDURE, {"room_id": room_id, "delta": delta}
                )
                logger.info(f"Room {room_id} users adjusted by {delta:+d} to {count}")
                return count
            except StoreError as e:
                if e.code != MISSING_PROCEDURE:
                    raise
                logger.warning(
                    f"{OCCUPANCY_PROCEDURE} is not available ({e}); "
                    "falling back to read-modify-write occupancy updates"
                )
                self.atomic_occupancy = False

        room = self.store.select_one(self.table, {"id": room_id})
        current = room.get("current_users") or 0
        count = max(0, current + delta)
        self.store.update(self.table, {"current_users": count}, {"id": room_id})
        logger.info(f"Room {room_id} users updated: {current} -> {count}")
        return count
