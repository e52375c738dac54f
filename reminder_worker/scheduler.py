"""
Reminder Check Scheduler

Periodically asks the notifier endpoint to scan reminders and send
due-window emails.
"""
import logging
import requests
from apscheduler.schedulers.background import BackgroundScheduler
import pytz

from .config import config

logger = logging.getLogger(__name__)


def trigger_check() -> dict:
    """
    Main job: POST the configured offset and time format to the notifier.

    Called periodically by the scheduler.
    """
    logger.info("🔍 Triggering scheduled reminder check...")
    try:
        resp = requests.post(
            f"{config.NOTIFIER_URL}/check-scheduled-reminders",
            json={
                "timezoneOffset": config.TIMEZONE_OFFSET,
                "timeFormat": config.TIME_FORMAT,
            },
            timeout=120
        )
        resp.raise_for_status()
        summary = resp.json()
    except requests.RequestException as e:
        logger.error(f"Failed to trigger reminder check: {e}")
        return {}

    logger.info(
        f"✅ Reminder check complete. Checked {summary.get('checked', 0)} reminders, "
        f"sent {summary.get('emailsSent', 0)} emails"
    )
    return summary


# Global scheduler instance
scheduler = BackgroundScheduler(timezone=pytz.utc)


def start_scheduler():
    """Start the periodic reminder check job."""
    scheduler.add_job(
        trigger_check,
        'interval',
        seconds=config.SCHEDULER_CHECK_INTERVAL,
        id='scheduled_reminder_job',
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"🚀 Scheduler started: reminder check every {config.SCHEDULER_CHECK_INTERVAL}s")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    scheduler.shutdown(wait=False)
    logger.info("🛑 Scheduler stopped")
