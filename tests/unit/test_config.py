"""Unit tests for configuration management."""

import os
from unittest.mock import MagicMock, patch

import pydantic
import pytest

from core.config import _reset_config, get_config
from core.errors import ConfigurationError

REQUIRED_ENV = {
    "CAL_WEBHOOK_SECRET": "whsec_test",
    "SERVICE_ROLE_KEY": "service-role-test",
    "SUPABASE_URL": "http://supabase.test",
}


@pytest.fixture(autouse=True)
def _clear_config_cache():
    _reset_config()
    yield
    _reset_config()


def test_get_config_defaults():
    """Test that get_config provides sensible defaults."""
    with patch.dict(os.environ, REQUIRED_ENV, clear=True):
        config = get_config()
        assert config.rest_path == "/rest/v1"
        assert config.bookings_table == "bookings"
        assert config.request_timeout_seconds == 10.0
        assert config.reject_unknown_events is False
        assert config.write_failure_status == 200
        assert config.environment == "local"


def test_bookings_url():
    with patch.dict(os.environ, {**REQUIRED_ENV, "SUPABASE_URL": "http://supabase.test/"}, clear=True):
        assert get_config().bookings_url == "http://supabase.test/rest/v1/bookings"


def test_missing_configuration_fails_fast():
    with patch.dict(os.environ, {"SUPABASE_URL": "http://supabase.test"}, clear=True):
        with pytest.raises(ConfigurationError, match="CAL_WEBHOOK_SECRET, SERVICE_ROLE_KEY"):
            get_config()


def test_string_coercion():
    env = {**REQUIRED_ENV, "REJECT_UNKNOWN_EVENTS": "true", "WRITE_FAILURE_STATUS": "502"}
    with patch.dict(os.environ, env, clear=True):
        config = get_config()
        assert config.reject_unknown_events is True
        assert config.write_failure_status == 502


def test_secret_resolved_from_secrets_manager():
    env = {k: v for k, v in REQUIRED_ENV.items() if k != "CAL_WEBHOOK_SECRET"}
    env["CAL_WEBHOOK_SECRET_ARN"] = "arn:aws:secretsmanager:us-east-1:123:secret:cal"

    with patch.dict(os.environ, env, clear=True), patch("core.config.boto3") as mock_boto3:
        mock_client = MagicMock()
        mock_client.get_secret_value.return_value = {"SecretString": "from-sm"}
        mock_boto3.client.return_value = mock_client

        config = get_config()

        assert config.cal_webhook_secret == "from-sm"
        mock_client.get_secret_value.assert_called_once_with(SecretId=env["CAL_WEBHOOK_SECRET_ARN"])


def test_config_is_cached():
    with patch.dict(os.environ, REQUIRED_ENV, clear=True):
        assert get_config() is get_config()


def test_config_is_immutable():
    with patch.dict(os.environ, REQUIRED_ENV, clear=True):
        config = get_config()
        with pytest.raises(pydantic.ValidationError):
            config.supabase_url = "http://elsewhere"  # type: ignore[misc]
