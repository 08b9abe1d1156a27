from fastapi import APIRouter, Depends, HTTPException, status

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
)


@router.get("/")
def get_notifications(dashboard: Dashboard = Depends(get_dashboard)):
    """Banners that have not expired or been dismissed yet."""
    return [n.to_dict() for n in dashboard.notifications.active()]


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_notification(notification_id: int, dashboard: Dashboard = Depends(get_dashboard)):
    if not dashboard.notifications.dismiss(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return None
