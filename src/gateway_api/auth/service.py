"""JWT issuance and validation for gateway API bearer tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence
from uuid import uuid4

import jwt
from fastapi import HTTPException, status

from gateway_api.config.settings import get_api_settings


class AuthenticatedUser:
    def __init__(self, user_id: str, roles: List[str], username: Optional[str] = None):
        self.user_id = user_id
        self.username = username or user_id
        self.roles = roles


def _unauthorized(message: str = "Invalid credentials") -> HTTPException:
    return HTTPException(status.HTTP_401_UNAUTHORIZED, detail={"error": "unauthorized", "message": message})


def create_access_token(user_id: str, roles: Sequence[str], *, username: Optional[str] = None) -> tuple[str, int]:
    settings = get_api_settings()
    expires_delta = timedelta(minutes=settings.jwt_access_minutes)
    expire_ts = datetime.now(timezone.utc) + expires_delta
    payload = {
        "sub": user_id,
        "username": username or user_id,
        "roles": list(roles),
        "exp": expire_ts,
        "jti": str(uuid4()),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, int(expires_delta.total_seconds())


async def decode_access_token(token: str) -> AuthenticatedUser:
    settings = get_api_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as exc:  # type: ignore[attr-defined]
        raise _unauthorized("Invalid token") from exc
    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token")
    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        raise _unauthorized("Invalid token")
    return AuthenticatedUser(str(user_id), [str(role) for role in roles], payload.get("username"))
