import pytest

from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType
from gateway_api.service.access_grants import AccessGrantService
from gateway_api.service.errors import NotFoundError, ValidationError

COMPUTE = PreferenceResourceType.COMPUTE


@pytest.fixture
def grants() -> AccessGrantService:
    return AccessGrantService()


def _create(grants: AccessGrantService, **overrides):
    fields = {
        "resource_type": COMPUTE,
        "resource_id": "res1",
        "owner_id": "chem",
        "owner_type": PreferenceLevel.GROUP,
        "gateway_id": "gw1",
        "credential_token": "tok-A",
    }
    fields.update(overrides)
    return grants.create_access_grant(**fields)


def test_effective_grant_is_last_created_enabled_grant(grants):
    _create(grants, credential_token="tok-A")
    newest = _create(grants, credential_token="tok-B")
    _create(grants, credential_token="tok-C", enabled=False)

    effective = grants.get_effective_access_grant(COMPUTE, "res1", "chem", PreferenceLevel.GROUP)

    assert effective.grant_id == newest.grant_id
    assert effective.credential_token == "tok-B"


def test_effective_grant_missing(grants):
    _create(grants, enabled=False)

    with pytest.raises(NotFoundError):
        grants.get_effective_access_grant(COMPUTE, "res1", "chem", PreferenceLevel.GROUP)


def test_grants_by_credential(grants):
    first = _create(grants)
    second = _create(grants, resource_id="res2", owner_id="gw1", owner_type="gateway")
    _create(grants, credential_token="tok-B")

    found = grants.get_access_grants_by_credential("tok-A")

    assert [grant.grant_id for grant in found] == [first.grant_id, second.grant_id]
    assert found[1].owner_type is PreferenceLevel.GATEWAY


@pytest.mark.parametrize("field", ["resource_id", "owner_id", "gateway_id", "credential_token"])
def test_blank_fields_write_nothing(grants, field):
    with pytest.raises(ValidationError):
        _create(grants, **{field: ""})

    assert grants.get_access_grants(COMPUTE, "res1") == []


def test_disabling_keeps_grant(grants):
    created = _create(grants)

    updated = grants.update_access_grant(created.grant_id, enabled=False)
    assert updated.enabled is False
    assert grants.get_enabled_access_grants(COMPUTE, "res1") == []

    updated = grants.update_access_grant(created.grant_id, enabled=True)
    assert [grant.grant_id for grant in grants.get_enabled_access_grants(COMPUTE, "res1")] == [created.grant_id]


def test_user_grant_owner_is_qualified_with_gateway(grants):
    created = _create(grants, owner_id="alice", owner_type=PreferenceLevel.USER)
    again = _create(grants, owner_id="alice@gw1", owner_type="USER", credential_token="tok-B")

    assert created.owner_id == "alice@gw1"
    assert again.owner_id == "alice@gw1"
    assert grants.get_accessible_resources("alice", "gw1", COMPUTE) == ["res1"]
    effective = grants.get_effective_access_grant(COMPUTE, "res1", "alice@gw1", PreferenceLevel.USER)
    assert effective.grant_id == again.grant_id


def test_user_owner_queries_require_gateway(grants):
    _create(grants, owner_id="alice", owner_type=PreferenceLevel.USER)

    with pytest.raises(ValidationError):
        grants.get_access_grants_by_owner("alice", PreferenceLevel.USER)
    with pytest.raises(ValidationError):
        grants.get_effective_access_grant(COMPUTE, "res1", "alice", PreferenceLevel.USER)

    found = grants.get_access_grants_by_owner("alice@gw1", PreferenceLevel.USER)
    assert [grant.owner_id for grant in found] == ["alice@gw1"]
