import json
import logging
from datetime import date, time
from typing import Mapping, Optional, Tuple
import requests
from .config import NotifierConfig

# Setup logger
logger = logging.getLogger(__name__)

EMAILJS_API_URL = "https://api.emailjs.com/api/v1.0/email/send"

# EmailJS rejects calls that do not look like they come from the web app
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

PRIORITY_ICONS = {
    "critical": "🔴",
    "urgent": "🟠",
}
DEFAULT_PRIORITY_ICON = "🟢"

NO_DESCRIPTION = "No description provided"


# =========================================================
# FORMATTING
# =========================================================
def format_time_for_email(value: Optional[time], time_format: str) -> str:
    """Render a clock time as "09:05" (24hr) or "9:05 AM" (12hr)."""
    if value is None:
        return ""

    if time_format == "24hr":
        return f"{value.hour:02d}:{value.minute:02d}"

    period = "PM" if value.hour >= 12 else "AM"
    hour12 = value.hour % 12 or 12
    return f"{hour12}:{value.minute:02d} {period}"


def format_due_date(due_date: date, due_time: Optional[time], time_format: str) -> str:
    """E.g. "Monday, June 10, 2024 at 9:00 AM". The time part is left out when unset."""
    text = f"{due_date:%A}, {due_date:%B} {due_date.day}, {due_date.year}"
    formatted_time = format_time_for_email(due_time, time_format)
    if formatted_time:
        text += f" at {formatted_time}"
    return text


def priority_icon(priority: str) -> str:
    return PRIORITY_ICONS.get(priority, DEFAULT_PRIORITY_ICON)


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def build_template_params(
    email: str,
    reminder,
    timing_text: str,
    time_format: str,
    config: NotifierConfig
) -> dict:
    """Fill the EmailJS reminder template for one reminder."""
    return {
        "email": email,
        "reminder_title": reminder.title,
        "reminder_type": _capitalize(reminder.type),
        "due_date": format_due_date(reminder.due_date, reminder.due_time, time_format),
        "priority_level": _capitalize(reminder.priority),
        "priority_icon": priority_icon(reminder.priority),
        "description": reminder.description or NO_DESCRIPTION,
        "timing_text": timing_text,
        "settings_link": config.settings_link,
    }


# =========================================================
# DELIVERY
# =========================================================
def _get_email_payload(template_params: Mapping, config: NotifierConfig) -> str:
    return json.dumps(
        {
            "service_id": config.EMAILJS_SERVICE_ID,
            "template_id": config.EMAILJS_TEMPLATE_ID,
            "user_id": config.EMAILJS_PUBLIC_KEY,
            "accessToken": config.EMAILJS_PRIVATE_KEY,
            "template_params": dict(template_params),
        }
    )


def send_emailjs(
    template_params: Mapping,
    config: Optional[NotifierConfig] = None
) -> Tuple[Mapping, int]:
    """
    Submits one templated email to EmailJS.

    Arguments:
        template_params (Mapping): Values for the EmailJS template.
        config (NotifierConfig, optional): Dependency injection for config.

    Returns a (body, status_code) pair and never raises.
    """
    cfg = config or NotifierConfig()

    # Validation
    if not cfg.email_configured:
        logger.error("Missing EmailJS configuration, skipping email")
        return {"status": "error", "message": "Email configuration is incomplete"}, 500

    headers = {
        "Content-Type": "application/json",
        "Origin": cfg.APP_URL,
        "User-Agent": BROWSER_USER_AGENT,
    }

    try:
        resp = requests.post(
            EMAILJS_API_URL,
            data=_get_email_payload(template_params, cfg),
            headers=headers,
            timeout=15
        )
    except requests.Timeout:
        logger.error("EmailJS request timed out")
        return {"status": "error", "message": "Request timed out"}, 408
    except requests.RequestException as e:
        logger.error(f"EmailJS send error: {e}")
        return {"status": "error", "message": "Failed to send email"}, 500

    # EmailJS answers with plain text ("OK" or an error reason)
    if not resp.ok:
        logger.error(f"EmailJS error ({resp.status_code}): {resp.text}")
        return {"status": "error", "message": resp.text}, resp.status_code

    return {"status": "ok", "message": resp.text}, resp.status_code


def send_reminder_notification(
    email: str,
    reminder,
    timing_text: str,
    time_format: str,
    config: Optional[NotifierConfig] = None
) -> Tuple[Mapping, int]:
    """
    Sends the due-window email for a reminder.
    """
    cfg = config or NotifierConfig()
    template_params = build_template_params(email, reminder, timing_text, time_format, cfg)
    return send_emailjs(template_params, cfg)
