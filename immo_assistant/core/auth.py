"""API-key authentication gate for chat endpoints."""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from fastapi import Header, HTTPException, status

from .config import get_settings


@dataclass(slots=True, frozen=True)
class AuthenticatedUser:
    """Identity attached to an accepted request."""

    user_id: str


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _key_matches(candidate: str, accepted: list[str]) -> bool:
    return any(hmac.compare_digest(candidate.encode(), key.encode()) for key in accepted if key)


def require_user(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None, alias="x-user-id"),
) -> AuthenticatedUser:
    """Resolve the caller identity or reject the request with 401."""

    settings = get_settings()
    if not settings.auth_enabled:
        return AuthenticatedUser(user_id=x_user_id or "anonymous")

    token = (x_api_key or _bearer_token(authorization) or "").strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if not _key_matches(token, settings.api_keys):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")

    return AuthenticatedUser(user_id=x_user_id or f"key:{token[:4]}")
