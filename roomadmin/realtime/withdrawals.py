from roomadmin.realtime.live_list import LiveList
from roomadmin.services.payouts import PayoutService
from roomadmin.store.feed import UPDATE, ChangeFeed


class WithdrawalReconciler(LiveList):
    """Withdrawal requests, newest first; reloaded whenever a balance changes."""

    table = "influencer_withdrawals"
    balance_table = "influencer_balances"

    def __init__(self, payouts: PayoutService, feed: ChangeFeed):
        super().__init__(feed)
        self.payouts = payouts

    def fetch(self):
        return self.payouts.list_withdrawals()

    def mount(self):
        self.subscribe(self.balance_table, lambda event: self.refresh(), events=[UPDATE])
        super().mount()

    def filter(self, status="all"):
        rows = self.rows()
        if status == "all":
            return rows
        return [row for row in rows if row.get("status") == status]
