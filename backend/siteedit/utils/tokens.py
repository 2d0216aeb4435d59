"""Magic link bearer tokens: generation and at-rest hashing"""

import hashlib
import secrets

TOKEN_BYTES = 24  # 32 URL-safe characters
TOKEN_PREFIX_LENGTH = 6


def generate_token() -> str:
    """Return an unguessable, fixed-length, URL-safe token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Return hex-encoded SHA-256 of the token (64 chars, matches String(64) column)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

