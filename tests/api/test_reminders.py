import json
from datetime import datetime, timedelta
from unittest.mock import patch

import pytz

from reminder_worker.notifier import local_now
from server.dependencies import get_notifier_config
from server.main import app


def due_in(hours, offset=5.5):
    """Row fields for a reminder due ``hours`` from now at the given offset."""
    due = local_now(datetime.now(pytz.utc), offset) + timedelta(hours=hours)
    return {"due_date": due.date().isoformat(), "due_time": due.strftime("%H:%M")}


def test_preflight_returns_empty_ok(api_client):
    response = api_client.options("/check-scheduled-reminders")
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"


@patch("reminder_worker.send.requests.post")
def test_check_sends_due_reminders(mock_post, api_client, use_supabase, supabase_client_factory,
                                   make_reminder, emailjs_response):
    mock_post.return_value = emailjs_response()
    use_supabase(supabase_client_factory(
        rows=[
            make_reminder(title="Lab Report", **due_in(24)),
            make_reminder(title="Far Away", **due_in(100)),
        ],
        emails={"user-1": "student@example.com"},
    ))

    response = api_client.post("/check-scheduled-reminders", json={"timezoneOffset": 5.5})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "checked": 2,
        "emailsSent": 1,
        "details": ["Lab Report -> student@example.com"],
    }


@patch("reminder_worker.send.requests.post")
def test_check_without_body_uses_defaults(mock_post, api_client, use_supabase, supabase_client_factory,
                                          make_reminder, emailjs_response):
    mock_post.return_value = emailjs_response()
    use_supabase(supabase_client_factory(
        rows=[make_reminder(**due_in(1, offset=5.5))],
        emails={"user-1": "student@example.com"},
    ))

    response = api_client.post("/check-scheduled-reminders", content=b"not json")

    assert response.status_code == 200
    assert response.json()["emailsSent"] == 1
    sent = json.loads(mock_post.call_args.kwargs["data"])
    assert sent["template_params"]["timing_text"] == "🚨 1 Hour Until Due!"
    assert sent["template_params"]["due_date"].endswith(("AM", "PM"))


@patch("reminder_worker.send.requests.post")
def test_check_honours_24_hour_format(mock_post, api_client, use_supabase, supabase_client_factory,
                                      make_reminder, emailjs_response):
    mock_post.return_value = emailjs_response()
    fields = due_in(48, offset=-5)
    use_supabase(supabase_client_factory(
        rows=[make_reminder(**fields)],
        emails={"user-1": "student@example.com"},
    ))

    response = api_client.post(
        "/check-scheduled-reminders", json={"timezoneOffset": -5, "timeFormat": "24hr"}
    )

    assert response.status_code == 200
    sent = json.loads(mock_post.call_args.kwargs["data"])
    assert sent["template_params"]["timing_text"] == "📆 2 Days Until Due"
    assert sent["template_params"]["due_date"].endswith(f"at {fields['due_time']}")


def test_check_fetch_failure_returns_500(api_client, use_supabase, supabase_client_factory):
    use_supabase(supabase_client_factory(fetch_error=Exception("permission denied for table reminders")))

    response = api_client.post("/check-scheduled-reminders", json={})

    assert response.status_code == 500
    assert response.json() == {"error": "permission denied for table reminders"}


def test_check_without_store_settings_returns_500(api_client, unconfigured_email, monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    unconfigured_email.SUPABASE_URL = None
    app.dependency_overrides[get_notifier_config] = lambda: unconfigured_email

    response = api_client.post("/check-scheduled-reminders", json={})

    assert response.status_code == 500
    assert "SUPABASE_URL" in response.json()["error"]


@patch("reminder_worker.send.requests.post")
def test_check_without_email_credentials_sends_nothing(mock_post, api_client, use_supabase, unconfigured_email,
                                                       supabase_client_factory, make_reminder):
    app.dependency_overrides[get_notifier_config] = lambda: unconfigured_email
    use_supabase(supabase_client_factory(
        rows=[make_reminder(**due_in(24))],
        emails={"user-1": "student@example.com"},
    ))

    response = api_client.post("/check-scheduled-reminders", json={})

    assert response.status_code == 200
    assert response.json()["emailsSent"] == 0
    mock_post.assert_not_called()


@patch("reminder_worker.send.requests.post")
def test_check_with_non_finite_offset_uses_default(mock_post, api_client, use_supabase,
                                                   supabase_client_factory, make_reminder, emailjs_response):
    mock_post.return_value = emailjs_response()
    use_supabase(supabase_client_factory(
        rows=[make_reminder(**due_in(24, offset=5.5))],
        emails={"user-1": "student@example.com"},
    ))

    for body in (b'{"timezoneOffset": NaN}', b'{"timezoneOffset": 1e12}', b'{"timezoneOffset": Infinity}'):
        response = api_client.post(
            "/check-scheduled-reminders", content=body, headers={"content-type": "application/json"}
        )
        assert response.status_code == 200
        assert response.json()["emailsSent"] == 1
