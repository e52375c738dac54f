"""
Supabase access for the reminder notifier.
Reads only: the reminders table and the auth admin user lookup.
"""
import logging
from typing import List, Optional
from supabase import Client, create_client
from ..config import NotifierConfig

logger = logging.getLogger(__name__)

REMINDERS_TABLE = "reminders"


def create_supabase_client(config: NotifierConfig) -> Client:
    """Create a service-role client; the notifier reads every user's reminders."""
    missing = []
    if not config.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not config.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")
    if missing:
        raise RuntimeError(f"Missing Supabase configuration: {', '.join(missing)}")

    return create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)


def fetch_incomplete_reminders(client: Client) -> List[dict]:
    """
    Fetch every reminder that is not completed.

    Errors are not caught here: without the reminder list there is
    nothing to check, so the caller fails the whole invocation.
    """
    response = (
        client.table(REMINDERS_TABLE)
        .select("*")
        .eq("completed", False)
        .execute()
    )
    return response.data or []


def get_user_email(client: Client, user_id: str) -> Optional[str]:
    """Resolve a user id to an email address via the auth admin API."""
    try:
        response = client.auth.admin.get_user_by_id(user_id)
    except Exception as e:
        logger.error(f"Failed to look up user {user_id}: {e}")
        return None

    user = getattr(response, "user", None)
    email = getattr(user, "email", None) if user else None
    if not email:
        logger.info(f"Could not get email for user {user_id}")
        return None
    return email
