from typing import Any, List, Mapping, Optional
from datetime import date, time, timedelta
from pydantic import BaseModel, model_validator
from server.enums import TimeFormat
from reminder_worker.scheduler_config import (
    COUNTRY_TIMEZONE_OFFSETS,
    DEFAULT_TIMEZONE_OFFSET,
    DEFAULT_TIME_FORMAT,
    MAX_TIMEZONE_OFFSET,
)

# =========================================================
# PYDANTIC SCHEMAS
# =========================================================

# Reminder Schemas
class Reminder(BaseModel):
    """Row of the reminders table, as read by the notifier."""
    id: str
    user_id: str
    title: str
    type: str = "other"
    due_date: date
    due_time: Optional[time] = None
    priority: str = "normal"
    description: Optional[str] = None
    completed: bool = False

    class Config:
        from_attributes = True

    @model_validator(mode="before")
    @classmethod
    def roll_over_end_of_day(cls, data: Any) -> Any:
        """Postgres TIME allows 24:00, which is midnight of the next day."""
        if not isinstance(data, Mapping):
            return data
        due_time = data.get("due_time")
        if not (isinstance(due_time, str) and due_time.startswith("24:00")):
            return data

        due_date = data.get("due_date")
        if isinstance(due_date, str):
            try:
                due_date = date.fromisoformat(due_date)
            except ValueError:
                return data
        if not isinstance(due_date, date):
            return data

        return {**data, "due_date": due_date + timedelta(days=1), "due_time": "00:00:00"}


def _usable_offset(value: Any) -> bool:
    # NaN, infinities and huge numbers all fail the range check
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return abs(value) <= MAX_TIMEZONE_OFFSET


# Notifier Trigger Schemas
class CheckRemindersRequest(BaseModel):
    timezone_offset: float = DEFAULT_TIMEZONE_OFFSET
    time_format: TimeFormat = TimeFormat(DEFAULT_TIME_FORMAT)

    @classmethod
    def from_body(cls, body: Any) -> "CheckRemindersRequest":
        """
        Build request options from a loosely-typed JSON body.

        Anything that is not a usable value falls back to the default
        instead of failing the request: an offset must be a finite JSON
        number within a day of UTC, and only the exact string "24hr"
        selects the 24-hour clock.
        """
        if not isinstance(body, Mapping):
            return cls()

        offset = body.get("timezoneOffset")
        if _usable_offset(offset):
            timezone_offset = float(offset)
        else:
            country_code = body.get("countryCode")
            timezone_offset = COUNTRY_TIMEZONE_OFFSETS.get(country_code, DEFAULT_TIMEZONE_OFFSET) \
                if isinstance(country_code, str) else DEFAULT_TIMEZONE_OFFSET

        if body.get("timeFormat") == TimeFormat.twenty_four_hour.value:
            time_format = TimeFormat.twenty_four_hour
        else:
            time_format = TimeFormat.twelve_hour

        return cls(timezone_offset=timezone_offset, time_format=time_format)


class CheckRemindersResponse(BaseModel):
    success: bool
    checked: int
    emailsSent: int
    details: List[str]


class ErrorResponse(BaseModel):
    error: str


# Email Notification Schemas
class EmailNotificationRequest(BaseModel):
    to: str
    reminder_title: str
    reminder_type: str
    due_date: str
    priority_level: str
    priority_icon: str
    description: Optional[str] = None
    timing_text: str


class EmailNotificationResponse(BaseModel):
    success: bool
