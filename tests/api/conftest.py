from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from server.dependencies import get_notifier_config
from server.main import app


@pytest.fixture
def api_client(notifier_config):
    app.dependency_overrides[get_notifier_config] = lambda: notifier_config
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def use_supabase():
    """Route store access to a prepared fake client."""
    patcher = None

    def _use(client):
        nonlocal patcher
        patcher = patch("server.routes.reminders.create_supabase_client", return_value=client)
        patcher.start()
        return client

    yield _use
    if patcher is not None:
        patcher.stop()
