# coding: utf-8

from fastapi.testclient import TestClient

from gateway_api.config.settings import get_api_settings


def _set(client: TestClient, headers, **overrides):
    body = {
        "resourceType": "COMPUTE",
        "resourceId": "res1",
        "ownerId": "gw",
        "level": "GATEWAY",
        "key": "preferredBatchQueue",
        "value": "normal",
    }
    body.update(overrides)
    return client.post("/api/v1/preferences", headers=headers, json=body)


def test_set_and_list_preferences(client: TestClient, admin_headers):
    response = _set(client, admin_headers, enforced=True)
    assert response.status_code == 204

    response = client.get(
        "/api/v1/preferences/COMPUTE/res1",
        headers=admin_headers,
        params={"level": "GATEWAY", "ownerId": "gw"},
    )
    assert response.status_code == 200
    assert response.json() == {"preferredBatchQueue": "normal"}

    response = client.get(
        "/api/v1/preferences/COMPUTE/res1",
        headers=admin_headers,
        params={"level": "GATEWAY", "ownerId": "gw", "detailed": "true"},
    )
    assert response.json() == [{"key": "preferredBatchQueue", "value": "normal", "enforced": True}]


def test_unknown_key_is_rejected(client: TestClient, admin_headers):
    response = _set(client, admin_headers, key="maxWallTime", value="60")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "bad_request"
    assert "maxWallTime" in detail["message"]
    assert "preferredBatchQueue" in detail["details"]["allowedKeys"]


def test_unknown_key_is_accepted_when_not_strict(client: TestClient, admin_headers, monkeypatch):
    monkeypatch.setattr(get_api_settings(), "strict_preference_keys", False)

    response = _set(client, admin_headers, key="maxWallTime", value="60")

    assert response.status_code == 204


def test_storage_keys_are_checked_against_storage_set(client: TestClient, admin_headers):
    response = _set(client, admin_headers, resourceType="STORAGE", key="scratchLocation", value="/tmp")
    assert response.status_code == 400

    response = _set(client, admin_headers, resourceType="STORAGE", key="fileSystemRootLocation", value="/data")
    assert response.status_code == 204


def test_missing_fields_return_400(client: TestClient, admin_headers):
    response = client.post(
        "/api/v1/preferences",
        headers=admin_headers,
        json={"resourceType": "COMPUTE", "resourceId": "res1"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "bad_request"


def test_requests_without_token_are_rejected(client: TestClient):
    response = client.get("/api/v1/preferences/COMPUTE/res1", params={"level": "GATEWAY", "ownerId": "gw"})

    assert response.status_code == 401


def test_members_cannot_write_preferences(client: TestClient, member_headers):
    response = _set(client, member_headers)

    assert response.status_code == 403


def test_resolve_applies_precedence(client: TestClient, admin_headers, member_headers):
    _set(client, admin_headers, value="normal")
    _set(client, admin_headers, ownerId="alice@gw", level="USER", value="debug")
    _set(client, admin_headers, key="scratchLocation", value="/scratch", enforced=True)
    _set(client, admin_headers, ownerId="alice@gw", level="USER", key="scratchLocation", value="/home")

    response = client.get(
        "/api/v1/preferences/resolve",
        headers=member_headers,
        params={"resourceType": "COMPUTE", "resourceId": "res1", "gatewayId": "gw", "userId": "alice"},
    )

    assert response.status_code == 200
    assert response.json() == {"preferredBatchQueue": "debug", "scratchLocation": "/scratch"}


def test_resolve_without_any_preferences_is_empty(client: TestClient, admin_headers):
    response = client.get(
        "/api/v1/preferences/resolve",
        headers=admin_headers,
        params={"resourceType": "STORAGE", "resourceId": "nothing", "gatewayId": "gw"},
    )

    assert response.status_code == 200
    assert response.json() == {}


def test_resolve_with_conflicts_and_selection(client: TestClient, admin_headers, member_headers):
    _set(client, admin_headers, ownerId="chem", level="GROUP", value="long")
    _set(client, admin_headers, ownerId="bio", level="GROUP", value="gpu")
    params = {
        "resourceType": "COMPUTE",
        "resourceId": "res1",
        "gatewayId": "gw",
        "userId": "alice",
        "groupIds": "chem,bio",
        "withConflicts": "true",
    }

    response = client.get("/api/v1/preferences/resolve", headers=member_headers, params=params)
    assert response.status_code == 200
    assert response.json() == {
        "resolved": {"preferredBatchQueue": "long"},
        "conflictKeys": ["preferredBatchQueue"],
        "conflictOptions": {
            "preferredBatchQueue": [
                {"groupId": "chem", "value": "long"},
                {"groupId": "bio", "value": "gpu"},
            ]
        },
    }

    response = client.post(
        "/api/v1/preferences/selection",
        headers=member_headers,
        params={"gatewayId": "gw"},
        json={
            "resourceType": "COMPUTE",
            "resourceId": "res1",
            "selectionKey": "preferredBatchQueue",
            "selectedGroupId": "bio",
        },
    )
    assert response.status_code == 204

    response = client.get("/api/v1/preferences/resolve", headers=member_headers, params=params)
    assert response.json()["resolved"] == {"preferredBatchQueue": "gpu"}


def test_members_cannot_choose_groups_for_others(client: TestClient, member_headers):
    response = client.post(
        "/api/v1/preferences/selection",
        headers=member_headers,
        params={"gatewayId": "gw"},
        json={
            "resourceType": "COMPUTE",
            "resourceId": "res1",
            "selectionKey": "preferredBatchQueue",
            "selectedGroupId": "bio",
            "userId": "bob",
        },
    )

    assert response.status_code == 403


def test_delete_preference_and_level(client: TestClient, admin_headers):
    _set(client, admin_headers)
    _set(client, admin_headers, key="reservation", value="r1")
    params = {"level": "GATEWAY", "ownerId": "gw"}

    response = client.delete(
        "/api/v1/preferences/COMPUTE/res1",
        headers=admin_headers,
        params={**params, "key": "reservation"},
    )
    assert response.status_code == 204
    # Deleting again is a no-op
    response = client.delete(
        "/api/v1/preferences/COMPUTE/res1",
        headers=admin_headers,
        params={**params, "key": "reservation"},
    )
    assert response.status_code == 204

    listed = client.get("/api/v1/preferences/COMPUTE/res1", headers=admin_headers, params=params)
    assert listed.json() == {"preferredBatchQueue": "normal"}

    response = client.delete("/api/v1/preferences/COMPUTE/res1/all", headers=admin_headers, params=params)
    assert response.status_code == 204

    listed = client.get("/api/v1/preferences/COMPUTE/res1", headers=admin_headers, params=params)
    assert listed.status_code == 200
    assert listed.json() == {}


def test_user_level_owner_must_carry_gateway(client: TestClient, admin_headers):
    response = _set(client, admin_headers, ownerId="alice", level="USER")

    assert response.status_code == 400
    assert response.json()["detail"]["details"] == {"ownerId": "alice"}

    response = client.get(
        "/api/v1/preferences/COMPUTE/res1",
        headers=admin_headers,
        params={"level": "USER", "ownerId": "alice"},
    )
    assert response.status_code == 400

    response = client.delete(
        "/api/v1/preferences/COMPUTE/res1/all",
        headers=admin_headers,
        params={"level": "USER", "ownerId": "alice"},
    )
    assert response.status_code == 400
