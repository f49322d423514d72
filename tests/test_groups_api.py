# coding: utf-8

from fastapi.testclient import TestClient


def _add(client: TestClient, headers, group_id: str, user_id: str):
    return client.post(
        f"/api/v1/groups/{group_id}/members",
        headers=headers,
        params={"gatewayId": "gw1"},
        json={"userId": user_id},
    )


def test_add_and_list_members(client: TestClient, admin_headers):
    response = _add(client, admin_headers, "chem", "alice")
    assert response.status_code == 201
    assert response.json() == {"groupId": "chem", "members": ["alice@gw1"]}

    # Adding twice keeps a single membership
    response = _add(client, admin_headers, "chem", "alice@gw1")
    assert response.json()["members"] == ["alice@gw1"]

    response = client.get("/api/v1/groups/chem/members", headers=admin_headers, params={"gatewayId": "gw1"})
    assert response.status_code == 200
    assert response.json()["members"] == ["alice@gw1"]


def test_list_user_groups(client: TestClient, admin_headers, member_headers):
    _add(client, admin_headers, "chem", "alice")
    _add(client, admin_headers, "bio", "alice")
    _add(client, admin_headers, "physics", "bob")

    response = client.get("/api/v1/groups", headers=admin_headers, params={"gatewayId": "gw1", "userId": "alice"})
    assert response.status_code == 200
    assert sorted(response.json()["groupIds"]) == ["bio", "chem"]

    response = client.get("/api/v1/groups", headers=member_headers, params={"gatewayId": "gw1"})
    assert sorted(response.json()["groupIds"]) == ["bio", "chem"]

    response = client.get("/api/v1/groups", headers=member_headers, params={"gatewayId": "gw1", "userId": "bob"})
    assert response.status_code == 403


def test_remove_member_is_idempotent(client: TestClient, admin_headers):
    _add(client, admin_headers, "chem", "alice")

    for _ in range(2):
        response = client.delete("/api/v1/groups/chem/members/alice", headers=admin_headers, params={"gatewayId": "gw1"})
        assert response.status_code == 204

    response = client.get("/api/v1/groups/chem/members", headers=admin_headers, params={"gatewayId": "gw1"})
    assert response.json()["members"] == []


def test_members_cannot_change_groups(client: TestClient, member_headers):
    response = _add(client, member_headers, "chem", "alice")

    assert response.status_code == 403
