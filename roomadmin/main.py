import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from roomadmin.config import get_settings
from roomadmin.dashboard import build_dashboard
from roomadmin.routers import notifications, payouts, promo_codes, rooms, status_message, webhooks

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    "lifespan for building the dashboard and its live views"
    dashboard = build_dashboard(settings)
    dashboard.start()
    app.state.dashboard = dashboard
    logger.info("Room admin started")
    yield
    dashboard.stop()
    logger.info("Room admin stopped")


app = FastAPI(
    lifespan=lifespan,
    title="Room admin",
    description="Admin dashboard for bookable rooms, promo codes, influencer payouts and the status banner.",
    version="0.0.1",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


app.include_router(rooms.router)
app.include_router(promo_codes.router)
app.include_router(payouts.router)
app.include_router(status_message.router)
app.include_router(notifications.router)
app.include_router(webhooks.router)
