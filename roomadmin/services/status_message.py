from datetime import datetime, timezone

from roomadmin.services.results import store_call
from roomadmin.store.base import Store


class StatusMessageService:
    table = "status_message"

    def __init__(self, store: Store):
        self.store = store

    def _latest(self):
        rows = self.store.select(self.table, order_by="created_at", descending=True, limit=1)
        return rows[0] if rows else None

    @store_call("fetching status message")
    def get_status_message(self):
        return self._latest()

    @store_call("updating status message")
    def update_status_message(self, message):
        now = datetime.now(timezone.utc).isoformat()
        existing = self._latest()
        if existing:
            rows = self.store.update(
                self.table, {"message": message, "updated_at": now}, {"id": existing["id"]}
            )
        else:
            rows = self.store.insert(
                self.table, {"message": message, "created_at": now, "updated_at": now}
            )
        return rows[0] if rows else None

    @store_call("deleting status message")
    def delete_status_message(self):
        existing = self._latest()
        if not existing:
            return None
        self.store.delete(self.table, {"id": existing["id"]})
        return True
