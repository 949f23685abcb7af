import hmac
from collections.abc import Mapping

from .interface import RequestVerifier


class BearerTokenVerifier(RequestVerifier):
    """Accepts `authorization: <secret>` or `authorization: Bearer <secret>`."""

    name = "token"

    def __init__(self, secret: str):
        self._secret = secret.encode()
        self._bearer = f"Bearer {secret}".encode()

    def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> bool:
        token = headers.get("authorization")
        if not token:
            return False
        supplied = token.encode()
        return hmac.compare_digest(supplied, self._secret) or hmac.compare_digest(supplied, self._bearer)
