from fastapi import HTTPException, Request, status

from roomadmin.dashboard import Dashboard


def get_dashboard(request: Request) -> Dashboard:
    """The dashboard handle built at startup."""
    return request.app.state.dashboard


def store_failure(dashboard: Dashboard, message: str, error: str) -> HTTPException:
    """Surface a failed store call as an error banner and a 502 response."""
    dashboard.notifications.error(f"{message}. Please try again.")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"{message}: {error}")
