import hashlib
import hmac
import logging
from collections.abc import Mapping

from .interface import RequestVerifier

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-cal-signature-256"


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of the body exactly as received."""
    return hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()


class SignatureVerifier(RequestVerifier):
    """Checks the provider's HMAC-SHA256 body signature."""

    name = "signature"

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> bool:
        signature = headers.get(SIGNATURE_HEADER)
        if not signature:
            return False
        computed = compute_signature(raw_body, self._secret)
        if not hmac.compare_digest(computed.encode(), signature.encode()):
            logger.warning("Invalid signature")
            return False
        return True
