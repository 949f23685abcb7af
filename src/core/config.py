from os import environ

import boto3
from pydantic import BaseModel, ConfigDict

from core.errors import ConfigurationError

_cached_secrets: dict[str, str] = {}


def _resolve_secret(name: str) -> str:
    """Fetch a secret from the environment or Secrets Manager, with caching."""
    if name in _cached_secrets:
        return _cached_secrets[name]

    # Local dev: use env var directly
    direct = environ.get(name, "")
    if direct:
        _cached_secrets[name] = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get(f"{name}_ARN", "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager", region_name=environ.get("AWS_REGION", "us-east-1"))
    _cached_secrets[name] = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_secrets[name]


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    cal_webhook_secret: str
    service_role_key: str
    supabase_url: str
    rest_path: str = "/rest/v1"
    bookings_table: str = "bookings"
    request_timeout_seconds: float = 10.0
    reject_unknown_events: bool = False
    write_failure_status: int = 200
    aws_region: str = "us-east-1"
    environment: str = "local"

    @property
    def bookings_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/{self.rest_path.strip('/')}/{self.bookings_table}"


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config and secrets, for testing only."""
    global _cached_config
    _cached_config = None
    _cached_secrets.clear()


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    required = {
        "CAL_WEBHOOK_SECRET": _resolve_secret("CAL_WEBHOOK_SECRET"),
        "SERVICE_ROLE_KEY": _resolve_secret("SERVICE_ROLE_KEY"),
        "SUPABASE_URL": environ.get("SUPABASE_URL", ""),
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    _cached_config = Config(
        cal_webhook_secret=required["CAL_WEBHOOK_SECRET"],
        service_role_key=required["SERVICE_ROLE_KEY"],
        supabase_url=required["SUPABASE_URL"],
        rest_path=environ.get("REST_PATH", "/rest/v1"),
        bookings_table=environ.get("BOOKINGS_TABLE", "bookings"),
        request_timeout_seconds=float(environ.get("REQUEST_TIMEOUT_SECONDS", "10")),
        reject_unknown_events=environ.get("REJECT_UNKNOWN_EVENTS", "false"),
        write_failure_status=int(environ.get("WRITE_FAILURE_STATUS", "200")),
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
