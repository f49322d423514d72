import json
from unittest import mock

import pytest
import requests

from gateway_api.client import (
    GatewayAuthorizationError,
    GatewayClient,
    GatewayConflictError,
    GatewayNotFoundError,
    GatewayTransientError,
    GatewayValidationError,
    extract_error_message,
)


def _response(status_code: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr("gateway_api.client.time.sleep", calls.append)
    return calls


def _client(*responses, max_retries: int = 3):
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = list(responses)
    client = GatewayClient(
        base_url="http://gateway.test/",
        token="abc",
        max_retries=max_retries,
        retry_delay_seconds=0.5,
        session=session,
    )
    return client, session


def test_get_is_retried_on_503(sleeps):
    client, session = _client(_response(503, {"detail": "busy"}), _response(200, {"queue": "normal"}))

    result = client.resolve_preferences("COMPUTE", "res1", "gw", user_id="alice", group_ids=["chem", "bio"])

    assert result == {"queue": "normal"}
    assert session.request.call_count == 2
    assert sleeps == [0.5]
    method, url = session.request.call_args.args
    assert method == "GET"
    assert url.startswith("http://gateway.test/api/v1/preferences/resolve?")
    assert "groupIds=chem%2Cbio" in url
    assert session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer abc"


def test_backoff_doubles_until_retries_are_spent(sleeps):
    client, session = _client(*[_response(502)] * 4)

    with pytest.raises(GatewayTransientError) as excinfo:
        client.get_access_grant(7)

    assert excinfo.value.status_code == 502
    assert session.request.call_count == 4
    assert sleeps == [0.5, 1.0, 2.0]


def test_network_errors_are_transient(sleeps):
    client, session = _client(requests.ConnectionError("refused"), _response(204))

    client.delete_access_grant(3)

    assert session.request.call_count == 2


def test_post_is_never_retried(sleeps):
    client, session = _client(_response(503, {"message": "down"}), _response(201, {"id": 1}))

    with pytest.raises(GatewayTransientError) as excinfo:
        client.create_gateway_grant("gw", "COMPUTE", "res1", "tok-A")

    assert excinfo.value.message == "down"
    assert session.request.call_count == 1
    assert sleeps == []


@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (400, GatewayValidationError),
        (401, GatewayAuthorizationError),
        (403, GatewayAuthorizationError),
        (404, GatewayNotFoundError),
        (409, GatewayConflictError),
    ],
)
def test_client_errors_are_not_retried(sleeps, status_code, error_type):
    client, session = _client(_response(status_code, {"detail": {"error": "x", "message": "nope"}}))

    with pytest.raises(error_type) as excinfo:
        client.get_access_grants("COMPUTE", "res1")

    assert excinfo.value.message == "nope"
    assert session.request.call_count == 1
    assert sleeps == []


def test_set_preferences_stops_at_first_failure(sleeps):
    client, session = _client(_response(204), _response(400, {"detail": {"message": "Unknown key"}}), _response(204))

    with pytest.raises(GatewayValidationError):
        client.set_preferences("COMPUTE", "res1", "gw", "GATEWAY", {"a": "1", "b": "2", "c": "3"})

    assert session.request.call_count == 2
    assert [call.kwargs["json"]["key"] for call in session.request.call_args_list] == ["a", "b"]


def test_create_user_grant_normalises_owner(sleeps):
    client, session = _client(_response(201, {"id": 4}))

    assert client.create_user_grant("gw", "alice", "STORAGE", "store1", "tok-A", login_username="al") == {"id": 4}

    payload = session.request.call_args.kwargs["json"]
    assert payload["ownerId"] == "alice@gw"
    assert payload["ownerType"] == "USER"
    assert payload["loginUsername"] == "al"


def test_access_control_returns_credential_list(sleeps):
    client, _ = _client(_response(200, {"credentials": [{"token": "tok-A"}]}))

    assert client.get_access_control("gw") == [{"token": "tok-A"}]


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"message": "m", "error": "e"}, "m"),
        ({"error": "e", "errorMessage": "em"}, "e"),
        ({"errorMessage": "em"}, "em"),
        ({"errors": ["a", {"message": "b"}]}, "a, b"),
        ({"detail": {"error": "conflict", "message": "dup"}}, "dup"),
        ({"detail": "plain"}, "plain"),
        ("text body", "text body"),
        ({}, None),
    ],
)
def test_extract_error_message(payload, expected):
    assert extract_error_message(payload) == expected


def test_non_json_error_body_is_used_verbatim(sleeps):
    client, _ = _client(_response(404, "no such grant"))

    with pytest.raises(GatewayNotFoundError) as excinfo:
        client.get_access_grant(1)

    assert excinfo.value.message == "no such grant"


def test_client_from_settings(monkeypatch):
    from gateway_api.config.settings import get_client_settings

    monkeypatch.setenv("GATEWAY_CLIENT_BASE_URL", "http://other.test:9000/")
    monkeypatch.setenv("GATEWAY_CLIENT_MAX_RETRIES", "0")
    get_client_settings.cache_clear()
    try:
        client = GatewayClient.from_settings()
    finally:
        get_client_settings.cache_clear()

    assert client._build_url("/api/v1/groups", params={"gatewayId": "gw", "userId": None}) == (
        "http://other.test:9000/api/v1/groups?gatewayId=gw"
    )
    assert client._max_retries == 0
