"""
Secret generation helpers for API keys and validation tokens.

Responsibilities:
- Generate API keys of the form: ids_key_<secret>
- Generate single-use validation tokens
- Derive a display prefix and last four characters so a key can be shown
  without revealing it
"""
from __future__ import annotations

import secrets
from typing import Tuple

API_KEY_PREFIX = "ids_key_"


def generate_secret(length: int = 32) -> str:
    """Return a high-entropy url-safe secret string (approx length)."""
    # token_urlsafe yields ~1.3 chars per byte; ~43 chars for 32 bytes
    return secrets.token_urlsafe(length)


def generate_api_key() -> str:
    return f"{API_KEY_PREFIX}{generate_secret()}"


def generate_validation_token() -> str:
    return generate_secret(24)


def derive_display_parts(key: str) -> Tuple[str, str]:
    """Return (prefix, last_four) for display.

    Prefix: first 8 chars of the key body (after ids_key_)
    Last four: last 4 chars of the key
    """
    if not key.startswith(API_KEY_PREFIX):
        return "", ""
    body = key[len(API_KEY_PREFIX) :]
    return body[:8], body[-4:]
