"""
Token Classification.

Decides which authentication header a credential is sent in. JWTs go in
``Authorization: Bearer <token>``; anything else is treated as an API key
and sent verbatim in the dedicated API key header.

The JWT check is a shape check on the compact serialization (three
non-empty base64url segments), not a cryptographic validation. An opaque
key that happens to have that shape is classified as a JWT. Header
selection depends on this exact boundary, so do not tighten it without
coordinating with the API side.
"""

from enum import Enum

BEARER_PREFIX = "Bearer "
DEFAULT_API_KEY_HEADER = "x-token-authorization"

_SEGMENT_CHARS = frozenset("-_")


class TokenKind(str, Enum):
    """How a credential is presented to the API."""

    JWT = "jwt"
    API_KEY = "api_key"


def strip_bearer_prefix(token: str) -> str:
    """Remove a leading, case-sensitive ``"Bearer "`` marker if present."""
    if token.startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX):]
    return token


def _is_segment(part: str) -> bool:
    return bool(part) and all(c.isalnum() or c in _SEGMENT_CHARS for c in part)


def is_jwt(token: str) -> bool:
    """Return True if the (already stripped) token looks like a compact JWS."""
    parts = token.split(".")
    return len(parts) == 3 and all(_is_segment(part) for part in parts)


def classify_token(raw_token: str) -> TokenKind:
    """Classify a credential, ignoring any leading bearer marker."""
    if is_jwt(strip_bearer_prefix(raw_token)):
        return TokenKind.JWT
    return TokenKind.API_KEY


def auth_headers(raw_token: str, api_key_header: str = DEFAULT_API_KEY_HEADER) -> dict[str, str]:
    """
    Build the authentication header for a credential.

    Args:
        raw_token: Credential as supplied by the user, with or without "Bearer "
        api_key_header: Header name used for non-JWT credentials

    Returns:
        Single-entry header mapping
    """
    token = strip_bearer_prefix(raw_token)
    if is_jwt(token):
        return {"Authorization": f"{BEARER_PREFIX}{token}"}
    return {api_key_header: token}
