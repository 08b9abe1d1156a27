from roomadmin.services.results import store_call
from roomadmin.store.base import Store


class PromoCodeService:
    table = "promo_codes"

    def __init__(self, store: Store):
        self.store = store

    @store_call("fetching promo codes")
    def list_promo_codes(self):
        return self.store.select(self.table, order_by="created_at")

    @store_call("adding promo code")
    def add_promo_code(self, promo_code):
        return self.store.insert(self.table, promo_code)

    @store_call("updating promo code")
    def update_promo_code(self, promo_code_id, values):
        return self.store.update(self.table, values, {"id": promo_code_id})

    @store_call("deleting promo code")
    def delete_promo_code(self, promo_code_id):
        self.store.delete(self.table, {"id": promo_code_id})
        return True
