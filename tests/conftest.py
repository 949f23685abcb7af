"""Shared test fixtures for the booking sync webhook."""

import hashlib
import hmac
import json
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

SECRET = "whsec_test"
SERVICE_KEY = "service-role-test"
SUPABASE_URL = "http://supabase.test"
BOOKINGS_URL = f"{SUPABASE_URL}/rest/v1/bookings"


@pytest.fixture
def config():
    from core.config import Config

    return Config(
        cal_webhook_secret=SECRET,
        service_role_key=SERVICE_KEY,
        supabase_url=SUPABASE_URL,
    )


@pytest.fixture
def data_api(config):
    """An open DataApiClient; pair with respx to mock the bookings table."""
    from core.services.data_api import DataApiClient

    with DataApiClient(config) as client:
        yield client


@pytest.fixture
def webhook_env(monkeypatch):
    """Environment for handler tests that go through get_config()."""
    from core.config import _reset_config

    monkeypatch.setenv("CAL_WEBHOOK_SECRET", SECRET)
    monkeypatch.setenv("SERVICE_ROLE_KEY", SERVICE_KEY)
    monkeypatch.setenv("SUPABASE_URL", SUPABASE_URL)
    for name in ("REJECT_UNKNOWN_EVENTS", "WRITE_FAILURE_STATUS", "REST_PATH", "BOOKINGS_TABLE"):
        monkeypatch.delenv(name, raising=False)
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def create_payload():
    return {
        "uid": "e1",
        "type": "consult",
        "attendees": [{"name": "A", "email": "a@x.com"}],
        "startTime": "2024-05-01T10:00:00Z",
        "endTime": "2024-05-01T10:30:00Z",
        "status": "ACCEPTED",
    }


@pytest.fixture
def sign():
    def _sign(body: bytes, secret: str = SECRET) -> str:
        return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()

    return _sign


@pytest.fixture
def make_event():
    """Build an API Gateway proxy event around a webhook body."""

    def _make_event(body: dict | str, headers: dict | None = None, method: str = "POST") -> dict:
        raw = body if isinstance(body, str) else json.dumps(body)
        return {
            "httpMethod": method,
            "path": "/cal-webhook",
            "headers": headers or {},
            "body": raw,
            "isBase64Encoded": False,
        }

    return _make_event
