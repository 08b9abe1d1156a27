"""
Explicitly constructed handle holding the store, services and live state.

Nothing here is a module-level singleton; the application builds one
``Dashboard`` at startup and hands it to request handlers.
"""
import logging
from typing import Optional

from roomadmin.config import Settings
from roomadmin.notifications import NotificationCenter
from roomadmin.realtime.occupancy import OccupancyUpdater
from roomadmin.realtime.promo_codes import PromoCodeReconciler
from roomadmin.realtime.rooms import RoomListReconciler
from roomadmin.realtime.status_message import StatusMessageReconciler
from roomadmin.realtime.withdrawals import WithdrawalReconciler
from roomadmin.services.payouts import PayoutService
from roomadmin.services.promo_codes import PromoCodeService
from roomadmin.services.rooms import RoomService
from roomadmin.services.status_message import StatusMessageService
from roomadmin.store.base import Store
from roomadmin.utils.scheduler import RefreshScheduler
from roomadmin.utils.session_window import Clock

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> Store:
    if settings.STORE_BACKEND == "local":
        from roomadmin.db import create_session_factory, init_database
        from roomadmin.store.local import SqlStore

        engine, session_factory = create_session_factory(settings.DATABASE_URL)
        init_database(engine)
        logger.info(f"Using local store at {settings.DATABASE_URL}")
        return SqlStore(session_factory)

    from roomadmin.store.rest import RestStore

    if not settings.store_configured:
        logger.warning(
            "Missing store credentials (SUPABASE_URL / SUPABASE_ANON_KEY); "
            "every store call will fail until they are set"
        )
    return RestStore(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )


class Dashboard:
    def __init__(self, store: Store, clock: Clock, settings: Settings):
        self.store = store
        self.clock = clock
        self.settings = settings
        self.notifications = NotificationCenter(clock, settings.NOTIFICATION_TTL_SECONDS)

        self.rooms = RoomService(store, atomic_occupancy=settings.OCCUPANCY_ATOMIC)
        self.promo_codes = PromoCodeService(store)
        self.payouts = PayoutService(store)
        self.status_messages = StatusMessageService(store)

        self.room_list = RoomListReconciler(self.rooms, store.feed, clock)
        self.occupancy = OccupancyUpdater(self.rooms, store.feed)
        self.promo_code_list = PromoCodeReconciler(self.promo_codes, store.feed)
        self.withdrawal_list = WithdrawalReconciler(self.payouts, store.feed)
        self.status_banner = StatusMessageReconciler(self.status_messages, store.feed)

        self.scheduler: Optional[RefreshScheduler] = None

    @property
    def live_views(self):
        return (
            self.room_list,
            self.occupancy,
            self.promo_code_list,
            self.withdrawal_list,
            self.status_banner,
        )

    def mount(self):
        for view in self.live_views:
            view.mount()
        logger.info("Dashboard live views mounted")

    def unmount(self):
        for view in self.live_views:
            view.unmount()

    def start(self):
        self.mount()
        self.scheduler = RefreshScheduler()
        self.scheduler.add_refresh("rooms", self.room_list.refresh, self.settings.ROOM_REFRESH_SECONDS)
        self.scheduler.start()

    def stop(self):
        if self.scheduler is not None:
            self.scheduler.stop()
            self.scheduler = None
        self.unmount()
        self.store.close()


def build_dashboard(settings: Settings) -> Dashboard:
    return Dashboard(build_store(settings), Clock(settings.SESSION_TIMEZONE), settings)
