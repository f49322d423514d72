# coding: utf-8

from fastapi.testclient import TestClient


def _create_credential(client: TestClient, headers, **overrides):
    body = {"gatewayId": "gw1", "ownerId": "alice", "name": "alice key", "type": "SSH", "secret": "s3cr3t"}
    body.update(overrides)
    response = client.post("/api/v1/credential-summaries", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_credential(client: TestClient, admin_headers):
    created = _create_credential(client, admin_headers, publicKey="ssh-ed25519 AAAA")

    assert created["ownerId"] == "alice@gw1"
    assert created["type"] == "SSH"
    assert created["publicKey"] == "ssh-ed25519 AAAA"
    assert "secret" not in created

    response = client.get(f"/api/v1/credential-summaries/{created['token']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "alice key"


def test_gateway_owned_credential_keeps_gateway_id(client: TestClient, admin_headers):
    created = _create_credential(client, admin_headers, ownerId="gw1", name="community")

    assert created["ownerId"] == "gw1"


def test_invalid_type_is_rejected(client: TestClient, admin_headers):
    response = client.post(
        "/api/v1/credential-summaries",
        headers=admin_headers,
        json={"gatewayId": "gw1", "name": "bad", "type": "KERBEROS"},
    )

    assert response.status_code == 400


def test_list_credentials(client: TestClient, admin_headers, member_headers):
    alice = _create_credential(client, admin_headers)
    _create_credential(client, admin_headers, ownerId="bob", name="bob key")

    response = client.get("/api/v1/credential-summaries", headers=admin_headers, params={"gatewayId": "gw1"})
    assert len(response.json()) == 2

    # Members only see their own, whatever owner they ask for
    response = client.get(
        "/api/v1/credential-summaries",
        headers=member_headers,
        params={"gatewayId": "gw1", "ownerId": "bob"},
    )
    assert [item["token"] for item in response.json()] == [alice["token"]]


def test_members_store_credentials_for_themselves(client: TestClient, member_headers):
    created = _create_credential(client, member_headers, ownerId=None)
    assert created["ownerId"] == "alice@gw1"

    response = client.post(
        "/api/v1/credential-summaries",
        headers=member_headers,
        json={"gatewayId": "gw1", "ownerId": "bob", "name": "x", "type": "SSH"},
    )
    assert response.status_code == 403


def test_delete_is_blocked_while_grants_reference_credential(client: TestClient, admin_headers):
    created = _create_credential(client, admin_headers)
    grant = client.post(
        "/api/v1/resource-access",
        headers=admin_headers,
        json={
            "resourceType": "COMPUTE",
            "resourceId": "res1",
            "ownerId": "gw1",
            "ownerType": "GATEWAY",
            "gatewayId": "gw1",
            "credentialToken": created["token"],
        },
    ).json()

    response = client.delete(f"/api/v1/credentials/{created['token']}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["detail"]["details"] == {"grantIds": [grant["id"]]}
    assert client.get(f"/api/v1/credential-summaries/{created['token']}", headers=admin_headers).status_code == 200

    client.delete(f"/api/v1/resource-access/{grant['id']}", headers=admin_headers)
    response = client.delete(f"/api/v1/credentials/{created['token']}", headers=admin_headers)
    assert response.status_code == 204
    assert client.get(f"/api/v1/credential-summaries/{created['token']}", headers=admin_headers).status_code == 404


def test_delete_missing_credential_returns_404(client: TestClient, admin_headers):
    response = client.delete("/api/v1/credentials/does-not-exist", headers=admin_headers)

    assert response.status_code == 404


def test_members_cannot_delete_other_credentials(client: TestClient, admin_headers, member_headers):
    bob = _create_credential(client, admin_headers, ownerId="bob", name="bob key")

    response = client.delete(f"/api/v1/credentials/{bob['token']}", headers=member_headers)

    assert response.status_code == 403
