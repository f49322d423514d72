# coding: utf-8

from fastapi.testclient import TestClient


def _grant(**overrides):
    body = {
        "resourceType": "COMPUTE",
        "resourceId": "res1",
        "ownerId": "gw1",
        "ownerType": "GATEWAY",
        "gatewayId": "gw1",
        "credentialToken": "tok-A",
        "enabled": True,
    }
    body.update(overrides)
    return body


def _create(client: TestClient, headers, **overrides):
    response = client.post("/api/v1/resource-access", headers=headers, json=_grant(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def _list(client: TestClient, headers, resource_id="res1"):
    response = client.get(
        "/api/v1/resource-access",
        headers=headers,
        params={"resourceType": "COMPUTE", "resourceId": resource_id},
    )
    assert response.status_code == 200
    return response.json()


def test_create_access_grant(client: TestClient, admin_headers):
    created = _create(client, admin_headers, loginUsername="  svc-user ")

    assert isinstance(created["id"], int)
    assert created["resourceType"] == "COMPUTE"
    assert created["ownerType"] == "GATEWAY"
    assert created["credentialToken"] == "tok-A"
    assert created["loginUsername"] == "svc-user"
    assert created["enabled"] is True
    assert created["createdTime"]
    assert [item["id"] for item in _list(client, admin_headers)] == [created["id"]]


def test_create_requires_credential_token(client: TestClient, admin_headers):
    before = _list(client, admin_headers)

    for payload in (_grant(credentialToken=""), _grant(credentialToken="   ")):
        response = client.post("/api/v1/resource-access", headers=admin_headers, json=payload)
        assert response.status_code == 400
        assert "credentialToken" in response.json()["detail"]["message"]

    payload = _grant()
    del payload["credentialToken"]
    response = client.post("/api/v1/resource-access", headers=admin_headers, json=payload)
    assert response.status_code == 400

    assert _list(client, admin_headers) == before


def test_create_rejects_unknown_owner_type(client: TestClient, admin_headers):
    response = client.post("/api/v1/resource-access", headers=admin_headers, json=_grant(ownerType="TEAM"))

    assert response.status_code == 400


def test_duplicate_grant_is_rejected(client: TestClient, admin_headers):
    first = _create(client, admin_headers)

    response = client.post("/api/v1/resource-access", headers=admin_headers, json=_grant())

    assert response.status_code == 409
    assert response.json()["detail"]["details"] == {"existingId": first["id"]}
    # A second credential for the same owner is a separate grant
    _create(client, admin_headers, credentialToken="tok-B")
    assert len(_list(client, admin_headers)) == 2


def test_enabled_filter(client: TestClient, admin_headers):
    kept = _create(client, admin_headers)
    disabled = _create(client, admin_headers, credentialToken="tok-B", enabled=False)
    toggled = _create(client, admin_headers, credentialToken="tok-C")

    response = client.put(f"/api/v1/resource-access/{toggled['id']}", headers=admin_headers, json={"enabled": False})
    assert response.status_code == 200
    assert response.json()["enabled"] is False

    response = client.get(
        "/api/v1/resource-access/enabled",
        headers=admin_headers,
        params={"resourceType": "COMPUTE", "resourceId": "res1"},
    )
    assert response.status_code == 200
    enabled = response.json()
    assert [item["id"] for item in enabled] == [kept["id"]]
    assert all(item["enabled"] for item in enabled)
    # Disabled grants are kept
    assert {item["id"] for item in _list(client, admin_headers)} == {kept["id"], disabled["id"], toggled["id"]}


def test_update_access_grant(client: TestClient, admin_headers):
    created = _create(client, admin_headers, loginUsername="svc")

    response = client.put(
        f"/api/v1/resource-access/{created['id']}",
        headers=admin_headers,
        json={"credentialToken": "tok-B", "loginUsername": ""},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["credentialToken"] == "tok-B"
    assert body["loginUsername"] is None
    assert body["enabled"] is True


def test_update_rejects_blank_token_and_duplicates(client: TestClient, admin_headers):
    first = _create(client, admin_headers)
    second = _create(client, admin_headers, credentialToken="tok-B")

    response = client.put(f"/api/v1/resource-access/{first['id']}", headers=admin_headers, json={"credentialToken": " "})
    assert response.status_code == 400

    response = client.put(
        f"/api/v1/resource-access/{second['id']}", headers=admin_headers, json={"credentialToken": "tok-A"}
    )
    assert response.status_code == 409


def test_missing_grant_returns_404(client: TestClient, admin_headers):
    assert client.get("/api/v1/resource-access/999", headers=admin_headers).status_code == 404
    assert client.put("/api/v1/resource-access/999", headers=admin_headers, json={"enabled": True}).status_code == 404
    assert client.delete("/api/v1/resource-access/999", headers=admin_headers).status_code == 404


def test_get_and_delete_access_grant(client: TestClient, admin_headers):
    created = _create(client, admin_headers)

    response = client.get(f"/api/v1/resource-access/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = client.delete(f"/api/v1/resource-access/{created['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert _list(client, admin_headers) == []


def test_list_by_type_and_owner(client: TestClient, admin_headers):
    gateway_grant = _create(client, admin_headers)
    group_grant = _create(client, admin_headers, ownerId="chem", ownerType="GROUP", resourceId="res2")
    storage_grant = _create(client, admin_headers, resourceType="STORAGE", resourceId="store1")
    _create(client, admin_headers, gatewayId="gw2", ownerId="gw2")

    response = client.get(
        "/api/v1/resource-access/by-type",
        headers=admin_headers,
        params={"gatewayId": "gw1", "resourceType": "COMPUTE"},
    )
    assert [item["id"] for item in response.json()] == [gateway_grant["id"], group_grant["id"]]

    response = client.get(
        "/api/v1/resource-access/owner/chem",
        headers=admin_headers,
        params={"ownerType": "GROUP"},
    )
    assert [item["id"] for item in response.json()] == [group_grant["id"]]

    response = client.get(
        "/api/v1/resource-access/owner/gw1",
        headers=admin_headers,
        params={"ownerType": "GATEWAY"},
    )
    assert [item["id"] for item in response.json()] == [gateway_grant["id"], storage_grant["id"]]


def test_accessible_resources(client: TestClient, admin_headers):
    _create(client, admin_headers, resourceId="gw-res")
    _create(client, admin_headers, resourceId="chem-res", ownerId="chem", ownerType="GROUP")
    _create(client, admin_headers, resourceId="bio-res", ownerId="bio", ownerType="GROUP")
    _create(client, admin_headers, resourceId="alice-res", ownerId="alice@gw1", ownerType="USER")
    _create(client, admin_headers, resourceId="off-res", ownerId="alice@gw1", ownerType="USER", enabled=False)
    _create(client, admin_headers, resourceId="bob-res", ownerId="bob@gw1", ownerType="USER")

    response = client.get(
        "/api/v1/resource-access/user/alice",
        headers=admin_headers,
        params={"gatewayId": "gw1", "resourceType": "COMPUTE", "groupIds": "chem"},
    )
    assert response.status_code == 200
    assert response.json() == {"resourceIds": ["alice-res", "chem-res", "gw-res"]}

    client.post(
        "/api/v1/groups/bio/members",
        headers=admin_headers,
        params={"gatewayId": "gw1"},
        json={"userId": "alice"},
    )
    response = client.get(
        "/api/v1/resource-access/user/alice",
        headers=admin_headers,
        params={"gatewayId": "gw1", "resourceType": "COMPUTE"},
    )
    assert response.json() == {"resourceIds": ["alice-res", "bio-res", "gw-res"]}


def test_members_cannot_create_grants(client: TestClient, member_headers):
    response = client.post("/api/v1/resource-access", headers=member_headers, json=_grant())

    assert response.status_code == 403


def test_members_can_read_grants(client: TestClient, admin_headers, member_headers):
    created = _create(client, admin_headers)

    response = client.get(f"/api/v1/resource-access/{created['id']}", headers=member_headers)

    assert response.status_code == 200


def test_user_grant_owner_is_qualified(client: TestClient, admin_headers):
    created = _create(client, admin_headers, ownerId="alice", ownerType="USER")

    assert created["ownerId"] == "alice@gw1"

    response = client.get(
        "/api/v1/resource-access/owner/alice@gw1",
        headers=admin_headers,
        params={"ownerType": "USER"},
    )
    assert [item["id"] for item in response.json()] == [created["id"]]

    response = client.get(
        "/api/v1/resource-access/owner/alice",
        headers=admin_headers,
        params={"ownerType": "USER"},
    )
    assert response.status_code == 400

    response = client.get(
        "/api/v1/resource-access/access-control",
        headers=admin_headers,
        params={"gatewayId": "gw1", "userId": "alice"},
    )
    assert [item["token"] for item in response.json()["credentials"]] == ["tok-A"]
