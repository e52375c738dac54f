"""
Reminder Due-Window Notifier

Scans every incomplete reminder, works out how far it is from being due
in the user's local time, and emails the owner when it falls inside one
of the notification windows.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional
import pytz
from pydantic import ValidationError

from server.schemas import Reminder
from .config import NotifierConfig
from .processors.apis import fetch_incomplete_reminders, get_user_email
from .scheduler_config import (
    NOTIFICATION_WINDOWS,
    NotificationWindow,
    DEFAULT_DUE_TIME,
    DEFAULT_TIMEZONE_OFFSET,
    DEFAULT_TIME_FORMAT,
)
from .send import send_reminder_notification

logger = logging.getLogger(__name__)


# =========================================================
# TIME ARITHMETIC
# =========================================================
def local_now(now_utc: datetime, timezone_offset: float) -> datetime:
    """
    Wall-clock "now" for a fixed UTC offset, as a naive datetime.

    The offset is applied as-is: no DST rules, no zone database.
    Sub-second precision is dropped so it lines up with due instants.
    """
    if now_utc.tzinfo is None:
        now_utc = pytz.utc.localize(now_utc)
    shifted = now_utc.astimezone(pytz.utc) + timedelta(hours=timezone_offset)
    return shifted.replace(tzinfo=None, microsecond=0)


def due_instant(due_date: date, due_time: Optional[time]) -> datetime:
    """Naive local due instant. Only hour and minute of the due time count."""
    if due_time is None:
        due_time = time.fromisoformat(DEFAULT_DUE_TIME)
    return datetime.combine(due_date, time(due_time.hour, due_time.minute))


def hours_until_due(reminder: Reminder, now_local: datetime) -> float:
    delta = due_instant(reminder.due_date, reminder.due_time) - now_local
    return delta.total_seconds() / 3600


def classify_window(hours: float) -> Optional[NotificationWindow]:
    """Return the first notification window containing ``hours``, if any."""
    for window in NOTIFICATION_WINDOWS:
        if hours < window.min_hours:
            continue
        if hours < window.max_hours or (window.include_max and hours == window.max_hours):
            return window
    return None


# =========================================================
# BATCH
# =========================================================
def _parse_reminder(row: dict) -> Optional[Reminder]:
    try:
        return Reminder.model_validate(row)
    except ValidationError as e:
        logger.warning(f"Skipping malformed reminder {row.get('id')}: {e}")
        return None


def check_scheduled_reminders(
    client,
    config: NotifierConfig,
    timezone_offset: float = DEFAULT_TIMEZONE_OFFSET,
    time_format: str = DEFAULT_TIME_FORMAT,
    now: Optional[datetime] = None
) -> dict:
    """
    Main job: check all incomplete reminders and send due-window emails.

    Failing to fetch the reminder list raises. Everything that goes wrong
    for a single reminder is logged and the batch moves on.
    """
    now = now or datetime.now(pytz.utc)
    now_local = local_now(now, timezone_offset)
    logger.info(
        f"🔍 Checking reminders. UTC time: {now.isoformat()}, "
        f"User local time: {now_local.isoformat()}, Offset: {timezone_offset}h"
    )

    try:
        rows = fetch_incomplete_reminders(client)
    except Exception as e:
        logger.error(f"Error fetching reminders: {e}")
        raise

    logger.info(f"Found {len(rows)} incomplete reminders")

    emails_sent: List[str] = []

    for row in rows:
        reminder = _parse_reminder(row)
        if reminder is None:
            continue

        hours = hours_until_due(reminder, now_local)
        logger.info(
            f"Reminder \"{reminder.title}\": Due at {reminder.due_date} "
            f"{reminder.due_time or DEFAULT_DUE_TIME}, Hours until due: {hours:.2f}"
        )

        email = get_user_email(client, reminder.user_id)
        if not email:
            continue

        window = classify_window(hours)
        if window is None:
            continue

        if not config.email_configured:
            logger.error("Missing EmailJS configuration, skipping email")
            continue

        logger.info(f"Sending {window.key} notification for reminder: {reminder.title} to {email}")
        try:
            result, status_code = send_reminder_notification(
                email, reminder, window.label, time_format, config
            )
        except Exception as e:
            logger.error(f"Error sending email for {reminder.title}: {e}")
            continue

        if 200 <= status_code < 300:
            emails_sent.append(f"{reminder.title} -> {email}")
            logger.info(f"✅ Email sent for: {reminder.title}")
        else:
            logger.error(f"❌ Failed to send email for {reminder.title}: {result}")

    logger.info(f"✅ Reminder check complete. Checked {len(rows)}, sent {len(emails_sent)}")

    return {
        "success": True,
        "checked": len(rows),
        "emailsSent": len(emails_sent),
        "details": emails_sent,
    }
