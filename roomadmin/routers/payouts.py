import logging
from typing import List, Literal

from fastapi import APIRouter, Depends, Query, status

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard, store_failure
from roomadmin.schemas.withdrawal import (
    BalanceResponse,
    PayRequest,
    RejectRequest,
    WithdrawalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/payouts",
    tags=["payouts"],
)

StatusFilter = Literal["all", "pending", "approved", "paid", "rejected"]


@router.get("/", response_model=List[WithdrawalResponse])
def get_withdrawals(
    status_filter: StatusFilter = Query("all", alias="status"),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Withdrawal requests, newest first, optionally narrowed to one status."""
    return [WithdrawalResponse.from_row(row) for row in dashboard.withdrawal_list.filter(status_filter)]


@router.post("/{withdrawal_id}/pay", status_code=status.HTTP_200_OK)
def pay_withdrawal(
    withdrawal_id: str,
    request: PayRequest,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """
    Confirm a payout. The settlement procedure flips the status to paid, stamps
    paid_at and updates the influencer's balance in one step.
    """
    data, error = dashboard.payouts.mark_as_paid(withdrawal_id, request.notes or None)
    if error:
        raise store_failure(dashboard, "Failed to process payment", error)
    logger.debug(f"Withdrawal {withdrawal_id} marked as paid")
    dashboard.notifications.success("Payment marked as completed successfully!")
    return {"id": withdrawal_id, "result": data}


@router.post("/{withdrawal_id}/reject", response_model=WithdrawalResponse)
def reject_withdrawal(
    withdrawal_id: str,
    request: RejectRequest,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Reject a pending or approved withdrawal; a reason is mandatory."""
    data, error = dashboard.payouts.reject_withdrawal(withdrawal_id, request.notes)
    if error:
        raise store_failure(dashboard, "Failed to reject withdrawal", error)
    dashboard.notifications.success("Withdrawal request rejected successfully!")
    return WithdrawalResponse.from_row(data[0])


@router.get("/balances/{influencer_id}", response_model=BalanceResponse)
def get_balance(influencer_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    data, error = dashboard.payouts.get_influencer_balance(influencer_id)
    if error:
        raise store_failure(dashboard, "Failed to load influencer balance", error)
    return data
