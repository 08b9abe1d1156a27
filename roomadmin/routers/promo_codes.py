from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard, store_failure
from roomadmin.schemas.promo_code import PromoCodeCreate, PromoCodeResponse, PromoCodeUpdate
from roomadmin.utils.validation_helpers import validate_expiry_date

router = APIRouter(
    prefix="/promo-codes",
    tags=["promo codes"],
)


def check_expiry(promo_code, dashboard: Dashboard):
    try:
        validate_expiry_date(promo_code.expiry_date, dashboard.clock.now().date())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/", response_model=List[PromoCodeResponse])
def get_promo_codes(dashboard: Dashboard = Depends(get_dashboard)):
    return [
        PromoCodeResponse.from_row(row, dashboard.clock)
        for row in dashboard.promo_code_list.rows()
    ]


@router.post("/", response_model=PromoCodeResponse, status_code=status.HTTP_201_CREATED)
def create_promo_code(promo_code: PromoCodeCreate, dashboard: Dashboard = Depends(get_dashboard)):
    check_expiry(promo_code, dashboard)
    data, error = dashboard.promo_codes.add_promo_code(promo_code.to_store_row())
    if error:
        raise store_failure(dashboard, "Failed to add promo code", error)
    dashboard.notifications.success("Promo code added successfully!")
    return PromoCodeResponse.from_row(data[0], dashboard.clock)


@router.put("/{promo_code_id}", response_model=PromoCodeResponse)
def update_promo_code(
    promo_code_id: str,
    promo_code: PromoCodeUpdate,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Update discount, usage cap, influencer or expiry; the code itself is fixed."""
    check_expiry(promo_code, dashboard)
    data, error = dashboard.promo_codes.update_promo_code(promo_code_id, promo_code.to_store_row())
    if error:
        raise store_failure(dashboard, "Failed to update promo code", error)
    if not data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promo code not found")
    dashboard.notifications.success("Promo code updated successfully!")
    return PromoCodeResponse.from_row(data[0], dashboard.clock)


@router.delete("/{promo_code_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_promo_code(promo_code_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    _, error = dashboard.promo_codes.delete_promo_code(promo_code_id)
    if error:
        raise store_failure(dashboard, "Failed to delete promo code", error)
    dashboard.notifications.success("Promo code deleted successfully!")
    return None
