import pytest
from fastapi.testclient import TestClient

from gateway_api.domain.access import CredentialOwnership
from gateway_api.domain.preferences import PreferenceLevel
from gateway_api.service.access_control import AccessControlService
from gateway_api.service.access_grants import AccessGrantService
from gateway_api.service.credentials import CredentialService
from gateway_api.service.groups import GroupService
from gateway_api.service.errors import ValidationError


@pytest.fixture
def grants() -> AccessGrantService:
    return AccessGrantService()


@pytest.fixture
def aggregator() -> AccessControlService:
    return AccessControlService()


def _grant(grants: AccessGrantService, **overrides):
    fields = {
        "resource_type": "COMPUTE",
        "resource_id": "res1",
        "owner_id": "gw1",
        "owner_type": "GATEWAY",
        "gateway_id": "gw1",
        "credential_token": "tok-A",
    }
    fields.update(overrides)
    return grants.create_access_grant(**fields)


def test_gateway_grant_is_inherited(grants, aggregator):
    _grant(grants)

    entries = aggregator.get_access_control("gw1", "alice@gw1")

    assert len(entries) == 1
    entry = entries[0]
    assert entry.token == "tok-A"
    assert entry.ownership is CredentialOwnership.INHERITED
    assert entry.source is PreferenceLevel.GATEWAY
    assert entry.source_id == "gw1"
    assert entry.name is None
    assert [binding.resource_id for binding in entry.compute_resources] == ["res1"]
    assert entry.storage_resources == []


def test_no_credentials_is_an_empty_list(aggregator):
    assert aggregator.get_access_control("gw1", "alice") == []


def test_owned_credential_wins_over_group_grant(grants, aggregator):
    owned = CredentialService().create_credential(
        gateway_id="gw1", owner_id="alice", name="alice key", credential_type="SSH"
    )
    GroupService().add_member("gw1", "chem", "alice")
    _grant(grants, owner_id="chem", owner_type="GROUP", credential_token=owned.token, login_username="alice")

    entries = aggregator.get_access_control("gw1", "alice")

    assert len(entries) == 1
    entry = entries[0]
    assert entry.token == owned.token
    assert entry.ownership is CredentialOwnership.OWNED
    assert entry.source is PreferenceLevel.USER
    assert entry.source_id == "alice@gw1"
    assert entry.name == "alice key"
    assert entry.credential_type == "SSH"
    assert entry.username == "alice"
    assert [binding.resource_id for binding in entry.compute_resources] == ["res1"]


def test_inherited_source_is_most_specific_grant(grants, aggregator):
    GroupService().add_member("gw1", "chem", "alice")
    _grant(grants, resource_id="res1")
    _grant(grants, resource_id="res2", owner_id="chem", owner_type="GROUP")
    _grant(grants, resource_id="store1", resource_type="STORAGE", owner_id="alice@gw1", owner_type="USER")

    entries = aggregator.get_access_control("gw1", "alice")

    assert len(entries) == 1
    entry = entries[0]
    assert entry.source is PreferenceLevel.USER
    assert entry.source_id == "alice@gw1"
    assert [binding.resource_id for binding in entry.compute_resources] == ["res1", "res2"]
    assert [binding.resource_id for binding in entry.storage_resources] == ["store1"]


def test_unreachable_and_disabled_grants_are_ignored(grants, aggregator):
    _grant(grants, owner_id="bio", owner_type="GROUP", credential_token="tok-bio")
    _grant(grants, owner_id="bob@gw1", owner_type="USER", credential_token="tok-bob")
    _grant(grants, credential_token="tok-off", enabled=False)
    _grant(grants, gateway_id="gw2", owner_id="gw2", credential_token="tok-gw2")

    assert aggregator.get_access_control("gw1", "alice") == []


def test_owned_before_inherited_in_grant_order(grants, aggregator):
    credentials = CredentialService()
    first = credentials.create_credential(gateway_id="gw1", owner_id="alice", name="one", credential_type="SSH")
    second = credentials.create_credential(gateway_id="gw1", owner_id="alice", name="two", credential_type="PASSWORD")
    credentials.create_credential(gateway_id="gw1", owner_id="bob", name="bob", credential_type="SSH")
    _grant(grants, credential_token="tok-late", resource_id="res2")
    _grant(grants, credential_token="tok-early", resource_id="res1", owner_id="alice@gw1", owner_type="USER")
    _grant(grants, credential_token="tok-late", resource_id="res3", owner_id="alice@gw1", owner_type="USER")

    entries = aggregator.get_access_control("gw1", "alice@gw1")

    tokens = [entry.token for entry in entries]
    assert set(tokens[:2]) == {first.token, second.token}
    assert all(entry.ownership is CredentialOwnership.OWNED for entry in entries[:2])
    assert tokens[2:] == ["tok-late", "tok-early"]
    assert entries[2].source is PreferenceLevel.USER


def test_duplicate_bindings_are_collapsed(grants, aggregator):
    GroupService().add_member("gw1", "chem", "alice")
    _grant(grants, resource_id="res1")
    _grant(grants, resource_id="res1", owner_id="chem", owner_type="GROUP")

    entry = aggregator.get_access_control("gw1", "alice")[0]

    assert [binding.resource_id for binding in entry.compute_resources] == ["res1"]
    assert entry.source is PreferenceLevel.GROUP
    assert entry.source_id == "chem"


def test_user_id_is_required(aggregator):
    with pytest.raises(ValidationError):
        aggregator.get_access_control("gw1", " ")


def test_access_control_endpoint(client: TestClient, admin_headers, member_headers):
    _grant(AccessGrantService())

    response = client.get(
        "/api/v1/resource-access/access-control",
        headers=admin_headers,
        params={"gatewayId": "gw1", "userId": "alice@gw1"},
    )
    assert response.status_code == 200
    credentials = response.json()["credentials"]
    assert len(credentials) == 1
    assert credentials[0]["token"] == "tok-A"
    assert credentials[0]["ownership"] == "INHERITED"
    assert credentials[0]["source"] == "GATEWAY"
    assert credentials[0]["sourceId"] == "gw1"
    assert credentials[0]["computeResources"] == [{"resourceId": "res1", "loginUsername": None}]

    # Members default to themselves and may not look at other users
    response = client.get(
        "/api/v1/resource-access/access-control",
        headers=member_headers,
        params={"gatewayId": "gw1"},
    )
    assert response.status_code == 200
    assert [item["token"] for item in response.json()["credentials"]] == ["tok-A"]

    response = client.get(
        "/api/v1/resource-access/access-control",
        headers=member_headers,
        params={"gatewayId": "gw1", "userId": "bob"},
    )
    assert response.status_code == 403


def test_user_grant_with_bare_owner_reaches_user(grants, aggregator):
    _grant(grants, owner_id="alice", owner_type="USER", credential_token="tok-own-grant")

    entries = aggregator.get_access_control("gw1", "alice")

    assert [entry.token for entry in entries] == ["tok-own-grant"]
    assert entries[0].source is PreferenceLevel.USER
    assert entries[0].source_id == "alice@gw1"
