from roomadmin.realtime.live_list import LiveList
from roomadmin.services.rooms import RoomService
from roomadmin.store.feed import ChangeFeed
from roomadmin.utils.session_window import Clock


class RoomListReconciler(LiveList):
    """Rooms scheduled for the clock's current date, newest first."""

    table = "rooms"
    upsert_on_update = True

    def __init__(self, rooms: RoomService, feed: ChangeFeed, clock: Clock):
        super().__init__(feed)
        self.rooms = rooms
        self.clock = clock

    def fetch(self):
        return self.rooms.list_for_date(self.clock.today())

    def accepts(self, row):
        return row.get("session_date") == self.clock.today()
