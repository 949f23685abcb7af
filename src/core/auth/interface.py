import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from core.errors import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)


class RequestVerifier(ABC):
    """Decides whether a raw webhook request comes from the scheduling provider."""

    name: str = "verifier"

    @abstractmethod
    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> bool: ...


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Lower-case header names; API Gateway passes them through as sent."""
    return {str(k).lower(): str(v) for k, v in (headers or {}).items() if v is not None}


def authenticate_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    verifiers: Sequence[RequestVerifier],
) -> str:
    """Return the name of the first verifier that accepts the request.

    Raises AuthenticationError when none does.
    """
    normalized = normalize_headers(headers)
    for verifier in verifiers:
        if verifier.verify(raw_body, normalized):
            logger.info("Request authenticated by %s", verifier.name)
            return verifier.name

    logger.warning("Rejected webhook request; headers present: %s", sorted(normalized))
    raise AuthenticationError("Neither bearer token nor body signature is valid")


def get_verifiers(secret: str) -> list[RequestVerifier]:
    if not secret:
        raise ConfigurationError("CAL_WEBHOOK_SECRET not configured")

    from core.auth.signature import SignatureVerifier
    from core.auth.bearer import BearerTokenVerifier

    return [SignatureVerifier(secret), BearerTokenVerifier(secret)]
