import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from roomadmin.dashboard import Dashboard
from roomadmin.dependencies import get_dashboard
from roomadmin.store.feed import ChangeEvent
from roomadmin.utils.webhook_security import SIGNATURE_HEADER, verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["webhooks"],
)


@router.post("/changes", status_code=status.HTTP_202_ACCEPTED)
async def receive_change(request: Request, dashboard: Dashboard = Depends(get_dashboard)):
    """
    Entry point for the hosted store's row-change webhooks.

    Body: ``{"type": "INSERT|UPDATE|DELETE", "table": ..., "record": ..., "old_record": ...}``.
    When WEBHOOK_SECRET is set the body must carry a valid signature header.
    """
    body = await request.body()
    secret = dashboard.settings.WEBHOOK_SECRET
    if secret and not verify_signature(body, request.headers.get(SIGNATURE_HEADER, ""), secret):
        logger.error(f"Invalid webhook signature from {request.client.host if request.client else 'unknown'}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook signature")

    try:
        payload = json.loads(body or b"{}")
        if not isinstance(payload, dict):
            raise ValueError("Webhook payload must be a JSON object")
        event = ChangeEvent.from_webhook(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.debug(f"Change webhook: {event.type} {event.table}")
    # Handlers may call the store, so keep them off the event loop.
    await run_in_threadpool(dashboard.store.feed.publish, event)
    return {"accepted": True, "table": event.table, "type": event.type}
