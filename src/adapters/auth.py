"""Helpers for the bearer token issued with the webhook grant.

Format checks only: the token is opaque to us and its signature is never
verified.
"""

from __future__ import annotations

BEARER_PREFIX = "Bearer "


def bearer_header(token: str) -> str:
    """Build the `Authorization` header value for `token`."""

    cleaned = token.strip()
    if not cleaned:
        raise ValueError("cannot build a bearer header from an empty token")
    return BEARER_PREFIX + cleaned


def mask_token(token: str, keep: int = 10) -> str:
    cleaned = token.strip()
    if len(cleaned) <= keep:
        return "*" * len(cleaned)
    return cleaned[:keep] + "..."


def looks_like_jwt(token: str) -> bool:
    """Three non-empty dot-separated segments (header.payload.signature)."""

    parts = token.strip().split(".")
    return len(parts) == 3 and all(parts)
