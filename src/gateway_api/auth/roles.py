"""Role helpers for enforcing RBAC within API implementations."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

from fastapi import HTTPException, status

from gateway_api.models.extra_models import TokenModel


PREFERENCE_VIEW_ROLES = {"admin", "gateway.admin", "gateway.member"}
PREFERENCE_EDIT_ROLES = {"admin", "gateway.admin"}
ACCESS_VIEW_ROLES = {"admin", "gateway.admin", "gateway.member"}
ACCESS_EDIT_ROLES = {"admin", "gateway.admin"}
GROUP_EDIT_ROLES = {"admin", "gateway.admin"}
# Members may manage their own credentials and group selections.
SELF_SERVICE_ROLES = {"admin", "gateway.admin", "gateway.member"}

# Bound per request by the bearer dependency in security_api.
_request_token: ContextVar[Optional[TokenModel]] = ContextVar("gateway_request_token", default=None)


def bind_request_token(token: TokenModel) -> None:
    _request_token.set(token)


def require_roles(*required: str) -> TokenModel:
    token = _request_token.get()
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "message": "Authentication required."},
        )
    if not set(token.roles).intersection(required):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "message": "Insufficient role to perform this action."},
        )
    return token
