# coding: utf-8

from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gateway_api.auth.roles import bind_request_token
from gateway_api.auth.service import decode_access_token
from gateway_api.config.settings import get_api_settings
from gateway_api.models.extra_models import TokenModel


bearer_auth = HTTPBearer(auto_error=False)


async def get_token_bearerAuth(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_auth),
) -> TokenModel:
    """
    Decode and validate bearer tokens for protected endpoints.

    This helper also powers the ContextVar used by ``require_roles`` so downstream
    implementations can enforce RBAC without threading credentials through every call.
    """

    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthorized", "message": "Missing bearer token"},
        )

    token_value = credentials.credentials
    token_model = await _resolve_token(token_value)
    bind_request_token(token_model)
    return token_model


async def _resolve_token(token_value: str) -> TokenModel:
    settings = get_api_settings()
    dev_token = (settings.dev_bypass_token or "").strip()
    if dev_token and token_value == dev_token:
        roles = [role.strip() for role in settings.dev_bypass_roles if role.strip()]
        return TokenModel(sub=settings.dev_bypass_subject, roles=roles or ["admin"])

    user = await decode_access_token(token_value)
    return TokenModel(sub=user.user_id, roles=user.roles)
