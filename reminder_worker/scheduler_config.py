"""
Scheduler Configuration for Reminder Notifications

Defines the due windows, request defaults and scheduler settings.
"""
from collections import namedtuple

NotificationWindow = namedtuple("NotificationWindow", ["key", "min_hours", "max_hours", "label", "include_max"])

# Evaluated in order, first match wins. Bounds are inclusive except the
# overdue upper bound, which excludes the due instant itself.
NOTIFICATION_WINDOWS = (
    NotificationWindow("3day", 71, 73, "📅 3 Days Until Due", True),
    NotificationWindow("2day", 47, 49, "📆 2 Days Until Due", True),
    NotificationWindow("1day", 23, 25, "⏰ 24 Hours Until Due", True),
    NotificationWindow("1hour", 0.5, 1.5, "🚨 1 Hour Until Due!", True),
    NotificationWindow("overdue", -1, 0, "⚠️ OVERDUE - Immediate Attention Required", False),
)

# Request defaults (IST, 12-hour clock)
DEFAULT_TIMEZONE_OFFSET = 5.5
DEFAULT_TIME_FORMAT = "12hr"

# Offsets beyond a full day are not timezones
MAX_TIMEZONE_OFFSET = 24

# Reminders without a due time are due at 09:00 local
DEFAULT_DUE_TIME = "09:00:00"

# Offsets offered by the app's country picker (hours from UTC)
COUNTRY_TIMEZONE_OFFSETS = {
    "IN": 5.5,
    "DE": 1,
    "US-EST": -5,
    "US-PST": -8,
    "GB": 0,
    "JP": 9,
    "AU-SYD": 11,
    "SG": 8,
    "AE": 4,
    "CA-TOR": -5,
}

# How often the scheduler triggers a check (in seconds)
SCHEDULER_CHECK_INTERVAL = 1800  # Every 30 minutes
