"""
Periodic self-healing refresh of live lists.

A blind full re-fetch on a fixed interval covers missed change events and the
day rollover; it is not a targeted retry.
"""
import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


class RefreshScheduler:
    def __init__(self):
        self.scheduler = BackgroundScheduler()

    def add_refresh(self, job_id: str, refresh: Callable[[], None], seconds: int):
        self.scheduler.add_job(
            refresh,
            IntervalTrigger(seconds=seconds),
            id=job_id,
            name=f"Refresh {job_id}",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=seconds,
        )
        logger.debug(f"Scheduled {job_id} refresh every {seconds}s")

    def start(self):
        if self.scheduler.running:
            logger.warning("Refresh scheduler already running")
            return
        self.scheduler.start()
        logger.info("Refresh scheduler started")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Refresh scheduler stopped")
