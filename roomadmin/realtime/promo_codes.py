from roomadmin.realtime.live_list import LiveList
from roomadmin.services.promo_codes import PromoCodeService
from roomadmin.store.feed import ChangeFeed


class PromoCodeReconciler(LiveList):
    table = "promo_codes"
    prepend = False

    def __init__(self, promo_codes: PromoCodeService, feed: ChangeFeed):
        super().__init__(feed)
        self.promo_codes = promo_codes

    def fetch(self):
        return self.promo_codes.list_promo_codes()
