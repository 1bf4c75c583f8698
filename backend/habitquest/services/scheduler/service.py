"""
Scheduler Service - Background scheduler lifecycle management
Handles starting, stopping, and configuring the APScheduler instance
"""
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from habitquest.core.config import settings
from habitquest.utils.timezone import get_tz
from .jobs import sweep_lapsed_streaks

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def get_scheduler() -> BackgroundScheduler:
    """
    Get the shared scheduler, creating it (not yet started) on first use

    Jobs added before start_scheduler() are held and run once it starts.
    """
    global scheduler

    if scheduler is None:
        scheduler = BackgroundScheduler()
    return scheduler


def start_scheduler():
    """
    Start the background scheduler
    Session countdowns are added per user; the streak sweep runs daily
    """
    sched = get_scheduler()

    if sched.running:
        logger.warning("Scheduler already running")
        return

    # Reset lapsed streaks once a day
    sched.add_job(
        func=sweep_lapsed_streaks,
        trigger=CronTrigger(hour=settings.STREAK_SWEEP_HOUR, minute=5, timezone=get_tz()),
        id='streak_sweep',
        name='Reset lapsed habit streaks',
        replace_existing=True
    )

    sched.start()
    logger.info(f"Scheduler started - streak sweep daily at {settings.STREAK_SWEEP_HOUR:02d}:05")


def stop_scheduler():
    """Stop the background scheduler"""
    global scheduler

    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    scheduler = None
