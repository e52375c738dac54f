import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from .scheduler_config import DEFAULT_TIMEZONE_OFFSET, DEFAULT_TIME_FORMAT, SCHEDULER_CHECK_INTERVAL

logger = logging.getLogger(__name__)

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
else:
    logger.debug(f".env.dev file not found at {env_path}, using process environment")

DEFAULT_APP_URL = "https://academialite.lovable.app"


class NotifierConfig:
    """
    Store and email-provider settings, resolved once per invocation.

    Every value may be passed explicitly; anything left out falls back
    to the environment.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_service_role_key: Optional[str] = None,
        emailjs_service_id: Optional[str] = None,
        emailjs_template_id: Optional[str] = None,
        emailjs_public_key: Optional[str] = None,
        emailjs_private_key: Optional[str] = None,
        app_url: Optional[str] = None,
    ) -> None:
        self.SUPABASE_URL = supabase_url or os.getenv("SUPABASE_URL")
        self.SUPABASE_SERVICE_ROLE_KEY = supabase_service_role_key or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        self.EMAILJS_SERVICE_ID = emailjs_service_id or os.getenv("EMAILJS_SERVICE_ID")
        self.EMAILJS_TEMPLATE_ID = emailjs_template_id or os.getenv("EMAILJS_TEMPLATE_ID")
        self.EMAILJS_PUBLIC_KEY = emailjs_public_key or os.getenv("EMAILJS_PUBLIC_KEY")
        self.EMAILJS_PRIVATE_KEY = emailjs_private_key or os.getenv("EMAILJS_PRIVATE_KEY")
        self.APP_URL = (app_url or os.getenv("APP_URL") or DEFAULT_APP_URL).rstrip("/")

    @property
    def email_configured(self) -> bool:
        return bool(
            self.EMAILJS_SERVICE_ID
            and self.EMAILJS_TEMPLATE_ID
            and self.EMAILJS_PUBLIC_KEY
            and self.EMAILJS_PRIVATE_KEY
        )

    @property
    def settings_link(self) -> str:
        return f"{self.APP_URL}/dashboard/reminders"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default


class WorkerConfig:
    """Settings for the periodic trigger that calls the notifier endpoint."""

    def __init__(self) -> None:
        self.NOTIFIER_URL = os.getenv("NOTIFIER_URL", "http://localhost:8000").rstrip("/")
        self.TIMEZONE_OFFSET = _env_number("TIMEZONE_OFFSET", DEFAULT_TIMEZONE_OFFSET, float)
        self.TIME_FORMAT = os.getenv("TIME_FORMAT", DEFAULT_TIME_FORMAT)
        self.SCHEDULER_CHECK_INTERVAL = _env_number("SCHEDULER_CHECK_INTERVAL", SCHEDULER_CHECK_INTERVAL, int)


config = WorkerConfig()
