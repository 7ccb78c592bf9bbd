from datetime import datetime, timedelta, timezone

import pytest

from calendar_gateway.config import OAuthClientConfig
from server import create_app


@pytest.fixture
def google_config():
    return OAuthClientConfig(
        client_id="google-client-id",
        client_secret="google-client-secret",
        redirect_uri="http://localhost:8080/google/callback",
    )


@pytest.fixture
def microsoft_config():
    return OAuthClientConfig(
        client_id="microsoft-client-id",
        client_secret="microsoft-client-secret",
        redirect_uri="http://localhost:8080/microsoft/callback",
        tenant_id="common",
    )


@pytest.fixture
def app(google_config, microsoft_config):
    app = create_app(google_config, microsoft_config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def providers(app):
    return app.extensions["calendar_providers"]


@pytest.fixture
def event_body():
    """Standup one hour from now, lasting an hour."""
    now = datetime.now(timezone.utc)
    return {
        "title": "Standup",
        "description": "daily",
        "location": "Room1",
        "startTime": (now + timedelta(hours=1)).isoformat(),
        "endTime": (now + timedelta(hours=2)).isoformat(),
    }
