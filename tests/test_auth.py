import contextvars

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from gateway_api.auth.roles import bind_request_token, require_roles
from gateway_api.auth.service import create_access_token, decode_access_token
from gateway_api.models.extra_models import TokenModel


@pytest.mark.asyncio
async def test_issued_token_round_trips_roles():
    token, expires_in = create_access_token("alice", ["gateway.member"], username="Alice")

    user = await decode_access_token(token)

    assert expires_in > 0
    assert user.user_id == "alice"
    assert user.username == "Alice"
    assert user.roles == ["gateway.member"]


@pytest.mark.asyncio
async def test_garbage_token_is_unauthorized():
    with pytest.raises(HTTPException) as excinfo:
        await decode_access_token("not-a-jwt")

    assert excinfo.value.status_code == 401


def test_invalid_bearer_is_rejected(client: TestClient):
    response = client.get(
        "/api/v1/groups",
        headers={"Authorization": "Bearer not-a-jwt"},
        params={"gatewayId": "gw1"},
    )

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "unauthorized"


def test_require_roles_without_bound_token_is_forbidden():
    with pytest.raises(HTTPException) as excinfo:
        contextvars.Context().run(require_roles, "admin")

    assert excinfo.value.status_code == 403


def test_require_roles_checks_bound_token_roles():
    def _check(roles):
        bind_request_token(TokenModel(sub="alice", roles=roles))
        return require_roles("gateway.admin", "admin")

    assert contextvars.Context().run(_check, ["gateway.admin"]).sub == "alice"
    with pytest.raises(HTTPException) as excinfo:
        contextvars.Context().run(_check, ["gateway.member"])
    assert excinfo.value.detail["error"] == "forbidden"
