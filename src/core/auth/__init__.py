"""Webhook request authentication."""

from core.auth.interface import RequestVerifier, authenticate_request, get_verifiers, normalize_headers
from core.auth.signature import SignatureVerifier, compute_signature
from core.auth.bearer import BearerTokenVerifier

__all__ = [
    "BearerTokenVerifier",
    "RequestVerifier",
    "SignatureVerifier",
    "authenticate_request",
    "compute_signature",
    "get_verifiers",
    "normalize_headers",
]
