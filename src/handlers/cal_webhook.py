"""Cal.com webhook handler: authenticates the delivery and syncs the bookings table."""

import base64
import logging
from typing import Any

from core.auth import authenticate_request, get_verifiers, normalize_headers
from core.config import Config, get_config
from core.errors import USER_MESSAGES, AuthenticationError, ErrorCode, ValidationError
from core.models.webhook import WebhookResponse
from core.services.data_api import DataApiClient
from core.services.dispatcher import dispatch, parse_webhook

logger = logging.getLogger(__name__)

# Leave the runtime this long to build the response after an outbound timeout
_TIMEOUT_MARGIN_SECONDS = 1.0


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Always answers with a JSON proxy response, whatever fails."""
    try:
        method = _http_method(event)
        headers = normalize_headers(event.get("headers"))
        logger.info("Webhook %s %s headers=%s", method, event.get("path") or event.get("rawPath"), sorted(headers))

        if method != "POST":
            return _proxy_response(
                WebhookResponse(status_code=405, ok=False, error=USER_MESSAGES[ErrorCode.METHOD_NOT_ALLOWED])
            )

        config = get_config()
        raw_body = _raw_body(event)
        authenticate_request(raw_body, headers, get_verifiers(config.cal_webhook_secret))
        webhook = parse_webhook(raw_body)
        with DataApiClient(config, timeout=_outbound_timeout(config, context)) as client:
            response = dispatch(webhook, client, config)
    except AuthenticationError as e:
        response = WebhookResponse(status_code=401, ok=False, error=e.user_message)
    except ValidationError as e:
        logger.warning("Rejected webhook payload: %s", e.message)
        response = WebhookResponse(status_code=400, ok=False, error=e.user_message)
    except Exception:
        logger.exception("Error processing webhook")
        response = WebhookResponse(status_code=500, ok=False, error=USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    return _proxy_response(response)


def _http_method(event: dict[str, Any]) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method")
    return (method or "POST").upper()


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode()


def _outbound_timeout(config: Config, context: object) -> float:
    timeout = config.request_timeout_seconds
    remaining = getattr(context, "get_remaining_time_in_millis", None)
    if callable(remaining):
        timeout = min(timeout, max(remaining() / 1000 - _TIMEOUT_MARGIN_SECONDS, 0.1))
    return timeout


def _proxy_response(response: WebhookResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": response.to_json(),
    }
