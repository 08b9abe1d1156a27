"""Influencer withdrawal bookkeeping."""
import logging

from roomadmin.services.results import store_call
from roomadmin.store.base import NOT_FOUND, Store, StoreError

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
PAID = "paid"
REJECTED = "rejected"
STATUSES = (PENDING, APPROVED, PAID, REJECTED)
OPEN_STATUSES = (PENDING, APPROVED)

SETTLEMENT_PROCEDURE = "process_withdrawal_payment"


def payout_amount(withdrawal):
    """The requested amount; older rows only carry ``amount``."""
    if withdrawal.get("amount_withdrawn") is not None:
        return withdrawal["amount_withdrawn"]
    return withdrawal.get("amount")


class PayoutService:
    table = "influencer_withdrawals"
    balance_table = "influencer_balances"

    def __init__(self, store: Store):
        self.store = store

    @store_call("fetching withdrawal requests")
    def list_withdrawals(self):
        return self.store.select(self.table, order_by="requested_at", descending=True)

    @store_call("marking withdrawal as paid")
    def mark_as_paid(self, withdrawal_id, notes=None):
        # Status, paid_at and the balance ledger change together inside the procedure.
        return self.store.rpc(
            SETTLEMENT_PROCEDURE, {"withdrawal_id": withdrawal_id, "admin_notes": notes}
        )

    def reject_withdrawal(self, withdrawal_id, notes):
        if not notes or not notes.strip():
            return None, "A reason is required to reject a withdrawal"
        return self._reject(withdrawal_id, notes.strip())

    @store_call("rejecting withdrawal")
    def _reject(self, withdrawal_id, notes):
        current = self.store.select_one(self.table, {"id": withdrawal_id})
        if current.get("status") not in OPEN_STATUSES:
            raise StoreError(f"Withdrawal {withdrawal_id} is already {current.get('status')}")

        values = {"status": REJECTED}
        # Older deployments have no notes column.
        if "notes" in current:
            values["notes"] = notes
        return self.store.update(self.table, values, {"id": withdrawal_id})

    @store_call("fetching influencer balance")
    def get_influencer_balance(self, influencer_id):
        try:
            return self.store.select_one(self.balance_table, {"influencer_id": influencer_id})
        except StoreError as e:
            if e.code != NOT_FOUND:
                raise
        return {"influencer_id": influencer_id, "total_earned": 0, "total_paid": 0}
