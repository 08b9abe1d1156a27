from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard, store_failure
from roomadmin.schemas.status_message import StatusMessageResponse, StatusMessageUpdate

router = APIRouter(
    prefix="/status-message",
    tags=["status message"],
)


@router.get("/", response_model=Optional[StatusMessageResponse])
def get_status_message(dashboard: Dashboard = Depends(get_dashboard)):
    return dashboard.status_banner.current


@router.put("/", response_model=StatusMessageResponse)
def save_status_message(update: StatusMessageUpdate, dashboard: Dashboard = Depends(get_dashboard)):
    try:
        update.check_length(dashboard.settings.STATUS_MESSAGE_MAX_LENGTH)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    data, error = dashboard.status_messages.update_status_message(update.message)
    if error:
        raise store_failure(dashboard, "Failed to save status message", error)
    dashboard.notifications.success("Status message saved successfully!")
    return data


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def reset_status_message(dashboard: Dashboard = Depends(get_dashboard)):
    _, error = dashboard.status_messages.delete_status_message()
    if error:
        raise store_failure(dashboard, "Failed to reset status message", error)
    dashboard.notifications.success("Status message reset successfully!")
    return None
