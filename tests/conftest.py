import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from reminder_worker.config import NotifierConfig

EMAILJS_ENV_VARS = (
    "EMAILJS_SERVICE_ID",
    "EMAILJS_TEMPLATE_ID",
    "EMAILJS_PUBLIC_KEY",
    "EMAILJS_PRIVATE_KEY",
)


@pytest.fixture
def notifier_config():
    return NotifierConfig(
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-role-key",
        emailjs_service_id="service_abc",
        emailjs_template_id="template_abc",
        emailjs_public_key="public_abc",
        emailjs_private_key="private_abc",
        app_url="https://academialite.lovable.app",
    )


@pytest.fixture
def unconfigured_email(monkeypatch):
    """Store settings present, every EmailJS credential absent."""
    for name in EMAILJS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return NotifierConfig(
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-role-key",
    )


@pytest.fixture
def make_reminder():
    def _make(**overrides):
        row = {
            "id": str(uuid.uuid4()),
            "user_id": "user-1",
            "title": "Physics Assignment",
            "type": "assignment",
            "due_date": "2024-06-10",
            "due_time": None,
            "priority": "critical",
            "description": "Chapter 5 problems",
            "completed": False,
        }
        row.update(overrides)
        return row
    return _make


def build_supabase_client(rows=None, emails=None, fetch_error=None):
    """
    MagicMock shaped like the parts of supabase.Client the notifier touches.

    ``emails`` maps user id -> address; unknown ids behave like a failed
    auth lookup.
    """
    client = MagicMock()
    query = client.table.return_value.select.return_value.eq.return_value
    if fetch_error is not None:
        query.execute.side_effect = fetch_error
    else:
        query.execute.return_value = SimpleNamespace(data=rows or [])

    emails = emails or {}

    def get_user_by_id(user_id):
        if user_id not in emails:
            raise Exception("User not found")
        return SimpleNamespace(user=SimpleNamespace(email=emails[user_id]))

    client.auth.admin.get_user_by_id.side_effect = get_user_by_id
    return client


@pytest.fixture
def supabase_client_factory():
    return build_supabase_client


@pytest.fixture
def emailjs_response():
    def _response(text="OK", status_code=200):
        resp = MagicMock()
        resp.ok = 200 <= status_code < 300
        resp.status_code = status_code
        resp.text = text
        return resp
    return _response
