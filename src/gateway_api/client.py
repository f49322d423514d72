"""HTTP client for the gateway access API."""

from __future__ import annotations

import json
import logging
import time
from enum import Enum
from typing import Any, Iterable, Mapping
from urllib.parse import quote, urlencode, urljoin

import requests
from requests import Response

from gateway_api.config.settings import get_client_settings
from gateway_api.domain.preferences import PreferenceLevel, user_owner_id

LOGGER = logging.getLogger(__name__)

_RETRYABLE_METHODS = frozenset({"GET", "PUT", "DELETE"})
_TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


class GatewayClientError(Exception):
    """Base error for gateway API client operations."""

    def __init__(self, message: str, *, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class GatewayValidationError(GatewayClientError):
    """Raised when the API rejects a request as invalid (400)."""


class GatewayNotFoundError(GatewayClientError):
    """Raised when the API returns 404."""


class GatewayConflictError(GatewayClientError):
    """Raised when the API reports a duplicate or a blocked delete (409)."""


class GatewayAuthorizationError(GatewayClientError):
    """Raised when authentication or authorization fails."""


class GatewayTransientError(GatewayClientError):
    """Raised for network failures and 5xx/429 responses once retries are spent."""


def extract_error_message(payload: Any) -> str | None:
    """Pull a human readable message out of an error body.

    FastAPI wraps errors as ``{"detail": ...}``; the envelope is unwrapped
    before looking at ``message``, ``error``, ``errorMessage`` and ``errors``.
    """

    if isinstance(payload, Mapping) and "detail" in payload:
        payload = payload["detail"]
    if isinstance(payload, str):
        return payload or None
    if not isinstance(payload, Mapping):
        return None
    for key in ("message", "error", "errorMessage"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        parts = []
        for item in errors:
            if isinstance(item, Mapping):
                text = item.get("message") or item.get("msg")
                parts.append(str(text) if text else json.dumps(item))
            else:
                parts.append(str(item))
        return ", ".join(parts)
    return None


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class GatewayClient:
    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._max_retries = max(0, max_retries)
        self._retry_delay_seconds = max(0.0, retry_delay_seconds)
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls) -> GatewayClient:
        settings = get_client_settings()
        return cls(
            base_url=settings.base_url,
            token=settings.token,
            timeout_seconds=float(settings.timeout_seconds),
            max_retries=settings.max_retries,
            retry_delay_seconds=settings.retry_delay_seconds,
        )

    # Preferences

    def resolve_preferences(
        self,
        resource_type: str,
        resource_id: str,
        gateway_id: str,
        *,
        user_id: str | None = None,
        group_ids: Iterable[str] | None = None,
    ) -> dict[str, str]:
        params = self._resolve_params(resource_type, resource_id, gateway_id, user_id, group_ids)
        return self._request_json("GET", "/api/v1/preferences/resolve", params=params)

    def resolve_preferences_with_conflicts(
        self,
        resource_type: str,
        resource_id: str,
        gateway_id: str,
        *,
        user_id: str | None = None,
        group_ids: Iterable[str] | None = None,
    ) -> dict[str, Any]:
        params = self._resolve_params(resource_type, resource_id, gateway_id, user_id, group_ids)
        params["withConflicts"] = "true"
        return self._request_json("GET", "/api/v1/preferences/resolve", params=params)

    def get_preferences_at_level(
        self,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        *,
        detailed: bool = False,
    ) -> Any:
        params: dict[str, object] = {"level": _enum_value(level), "ownerId": owner_id}
        if detailed:
            params["detailed"] = "true"
        return self._request_json(
            "GET",
            f"/api/v1/preferences/{_enum_value(resource_type)}/{quote(resource_id, safe='')}",
            params=params,
        )

    def set_preference(
        self,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        key: str,
        value: str,
        *,
        enforced: bool = False,
    ) -> None:
        payload = {
            "resourceType": _enum_value(resource_type),
            "resourceId": resource_id,
            "ownerId": owner_id,
            "level": _enum_value(level),
            "key": key,
            "value": value,
            "enforced": enforced,
        }
        self._request("POST", "/api/v1/preferences", json_body=payload)

    def set_preferences(
        self,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        preferences: Mapping[str, str],
        *,
        enforced: bool = False,
    ) -> None:
        """Set each key with its own request; the first failure stops the loop and propagates."""

        for key, value in preferences.items():
            self.set_preference(resource_type, resource_id, owner_id, level, key, value, enforced=enforced)

    def delete_preference(self, resource_type: str, resource_id: str, owner_id: str, level: str, key: str) -> None:
        self._request(
            "DELETE",
            f"/api/v1/preferences/{_enum_value(resource_type)}/{quote(resource_id, safe='')}",
            params={"level": _enum_value(level), "ownerId": owner_id, "key": key},
        )

    def delete_all_preferences(self, resource_type: str, resource_id: str, owner_id: str, level: str) -> None:
        self._request(
            "DELETE",
            f"/api/v1/preferences/{_enum_value(resource_type)}/{quote(resource_id, safe='')}/all",
            params={"level": _enum_value(level), "ownerId": owner_id},
        )

    def set_group_selection(
        self,
        gateway_id: str,
        resource_type: str,
        resource_id: str,
        selection_key: str,
        selected_group_id: str,
        *,
        user_id: str | None = None,
    ) -> None:
        payload = {
            "resourceType": _enum_value(resource_type),
            "resourceId": resource_id,
            "selectionKey": selection_key,
            "selectedGroupId": selected_group_id,
        }
        if user_id:
            payload["userId"] = user_id
        self._request("POST", "/api/v1/preferences/selection", params={"gatewayId": gateway_id}, json_body=payload)

    # Access grants

    def get_access_grants(self, resource_type: str, resource_id: str) -> list[dict[str, Any]]:
        return self._request_json(
            "GET",
            "/api/v1/resource-access",
            params={"resourceType": _enum_value(resource_type), "resourceId": resource_id},
        )

    def get_access_grants_by_type(self, gateway_id: str, resource_type: str) -> list[dict[str, Any]]:
        return self._request_json(
            "GET",
            "/api/v1/resource-access/by-type",
            params={"gatewayId": gateway_id, "resourceType": _enum_value(resource_type)},
        )

    def get_enabled_access_grants(self, resource_type: str, resource_id: str) -> list[dict[str, Any]]:
        return self._request_json(
            "GET",
            "/api/v1/resource-access/enabled",
            params={"resourceType": _enum_value(resource_type), "resourceId": resource_id},
        )

    def get_access_grants_by_owner(self, owner_id: str, owner_type: str) -> list[dict[str, Any]]:
        return self._request_json(
            "GET",
            f"/api/v1/resource-access/owner/{quote(owner_id, safe='')}",
            params={"ownerType": _enum_value(owner_type)},
        )

    def get_accessible_resources(
        self,
        user_id: str,
        gateway_id: str,
        resource_type: str,
        *,
        group_ids: Iterable[str] | None = None,
    ) -> list[str]:
        params: dict[str, object] = {"gatewayId": gateway_id, "resourceType": _enum_value(resource_type)}
        if group_ids is not None:
            params["groupIds"] = ",".join(group_ids)
        payload = self._request_json(
            "GET",
            f"/api/v1/resource-access/user/{quote(user_id, safe='')}",
            params=params,
        )
        return list(payload.get("resourceIds", []))

    def get_access_grant(self, grant_id: int) -> dict[str, Any]:
        return self._request_json("GET", f"/api/v1/resource-access/{int(grant_id)}")

    def create_access_grant(self, grant: Mapping[str, Any]) -> dict[str, Any]:
        payload = {key: _enum_value(value) for key, value in grant.items() if value is not None}
        return self._request_json("POST", "/api/v1/resource-access", json_body=payload)

    def create_gateway_grant(
        self,
        gateway_id: str,
        resource_type: str,
        resource_id: str,
        credential_token: str,
        *,
        login_username: str | None = None,
    ) -> dict[str, Any]:
        return self.create_access_grant(
            _grant_payload(
                gateway_id, resource_type, resource_id, gateway_id, PreferenceLevel.GATEWAY, credential_token, login_username
            )
        )

    def create_group_grant(
        self,
        gateway_id: str,
        group_id: str,
        resource_type: str,
        resource_id: str,
        credential_token: str,
        *,
        login_username: str | None = None,
    ) -> dict[str, Any]:
        return self.create_access_grant(
            _grant_payload(
                gateway_id, resource_type, resource_id, group_id, PreferenceLevel.GROUP, credential_token, login_username
            )
        )

    def create_user_grant(
        self,
        gateway_id: str,
        user_id: str,
        resource_type: str,
        resource_id: str,
        credential_token: str,
        *,
        login_username: str | None = None,
    ) -> dict[str, Any]:
        owner_id = user_owner_id(user_id, gateway_id)
        return self.create_access_grant(
            _grant_payload(
                gateway_id, resource_type, resource_id, owner_id, PreferenceLevel.USER, credential_token, login_username
            )
        )

    def update_access_grant(
        self,
        grant_id: int,
        *,
        enabled: bool | None = None,
        credential_token: str | None = None,
        login_username: str | None = None,
    ) -> dict[str, Any]:
        payload = {
            key: value
            for key, value in {
                "enabled": enabled,
                "credentialToken": credential_token,
                "loginUsername": login_username,
            }.items()
            if value is not None
        }
        return self._request_json("PUT", f"/api/v1/resource-access/{int(grant_id)}", json_body=payload)

    def delete_access_grant(self, grant_id: int) -> None:
        self._request("DELETE", f"/api/v1/resource-access/{int(grant_id)}")

    def get_access_control(self, gateway_id: str, *, user_id: str | None = None) -> list[dict[str, Any]]:
        payload = self._request_json(
            "GET",
            "/api/v1/resource-access/access-control",
            params={"gatewayId": gateway_id, "userId": user_id},
        )
        return list(payload.get("credentials", []))

    # Credentials

    def list_credentials(self, gateway_id: str, *, owner_id: str | None = None) -> list[dict[str, Any]]:
        return self._request_json(
            "GET",
            "/api/v1/credential-summaries",
            params={"gatewayId": gateway_id, "ownerId": owner_id},
        )

    def get_credential_summary(self, token: str) -> dict[str, Any]:
        return self._request_json("GET", f"/api/v1/credential-summaries/{quote(token, safe='')}")

    def create_credential(
        self,
        gateway_id: str,
        name: str,
        credential_type: str,
        *,
        owner_id: str | None = None,
        description: str | None = None,
        public_key: str | None = None,
        secret: str | None = None,
    ) -> dict[str, Any]:
        payload = {
            "gatewayId": gateway_id,
            "ownerId": owner_id,
            "name": name,
            "type": _enum_value(credential_type),
            "description": description,
            "publicKey": public_key,
            "secret": secret,
        }
        return self._request_json(
            "POST",
            "/api/v1/credential-summaries",
            json_body={key: value for key, value in payload.items() if value is not None},
        )

    def delete_credential(self, token: str) -> None:
        self._request("DELETE", f"/api/v1/credentials/{quote(token, safe='')}")

    # Groups

    def list_user_groups(self, gateway_id: str, *, user_id: str | None = None) -> list[str]:
        payload = self._request_json("GET", "/api/v1/groups", params={"gatewayId": gateway_id, "userId": user_id})
        return list(payload.get("groupIds", []))

    def list_group_members(self, gateway_id: str, group_id: str) -> list[str]:
        payload = self._request_json(
            "GET",
            f"/api/v1/groups/{quote(group_id, safe='')}/members",
            params={"gatewayId": gateway_id},
        )
        return list(payload.get("members", []))

    def add_group_member(self, gateway_id: str, group_id: str, user_id: str) -> list[str]:
        payload = self._request_json(
            "POST",
            f"/api/v1/groups/{quote(group_id, safe='')}/members",
            params={"gatewayId": gateway_id},
            json_body={"userId": user_id},
        )
        return list(payload.get("members", []))

    def remove_group_member(self, gateway_id: str, group_id: str, user_id: str) -> None:
        self._request(
            "DELETE",
            f"/api/v1/groups/{quote(group_id, safe='')}/members/{quote(user_id, safe='')}",
            params={"gatewayId": gateway_id},
        )

    # Transport

    @staticmethod
    def _resolve_params(
        resource_type: str,
        resource_id: str,
        gateway_id: str,
        user_id: str | None,
        group_ids: Iterable[str] | None,
    ) -> dict[str, object]:
        params: dict[str, object] = {
            "resourceType": _enum_value(resource_type),
            "resourceId": resource_id,
            "gatewayId": gateway_id,
            "userId": user_id,
        }
        groups = [group_id for group_id in (group_ids or []) if group_id]
        if groups:
            params["groupIds"] = ",".join(groups)
        return params

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json_body: Any = None,
    ) -> Any:
        response = self._request(method, path, params=params, json_body=json_body)
        if not response.content:
            return {}
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise GatewayClientError("Gateway API returned invalid JSON.", status_code=response.status_code) from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json_body: Any = None,
    ) -> Response:
        url = self._build_url(path, params=params)
        retries = self._max_retries if method.upper() in _RETRYABLE_METHODS else 0
        attempt = 0
        while True:
            try:
                response = self._session.request(
                    method,
                    url,
                    headers=self._build_headers(),
                    json=json_body,
                    timeout=self._timeout_seconds,
                )
            except requests.RequestException as exc:
                error: GatewayClientError = GatewayTransientError(str(exc) or "Gateway API request failed.")
            else:
                if response.status_code < 400:
                    return response
                error = self._error_for_response(response)
            if not isinstance(error, GatewayTransientError) or attempt >= retries:
                raise error
            delay = self._retry_delay_seconds * (2 ** attempt)
            LOGGER.warning(
                "%s %s failed (%s); retrying in %.2fs (attempt %d/%d)",
                method,
                path,
                error.message,
                delay,
                attempt + 1,
                retries,
            )
            time.sleep(delay)
            attempt += 1

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _build_url(self, path: str, *, params: dict[str, object] | None = None) -> str:
        url = urljoin(f"{self._base_url}/", path.lstrip("/"))
        if params:
            query = urlencode({key: value for key, value in params.items() if value is not None})
            if query:
                return f"{url}?{query}"
        return url

    @staticmethod
    def _error_for_response(response: Response) -> GatewayClientError:
        try:
            payload: Any = response.json()
        except ValueError:
            payload = response.text
        status_code = response.status_code
        message = extract_error_message(payload) or f"Gateway API request failed with status {status_code}."
        if status_code == 400:
            return GatewayValidationError(message, status_code=status_code, payload=payload)
        if status_code in {401, 403}:
            return GatewayAuthorizationError(message, status_code=status_code, payload=payload)
        if status_code == 404:
            return GatewayNotFoundError(message, status_code=status_code, payload=payload)
        if status_code == 409:
            return GatewayConflictError(message, status_code=status_code, payload=payload)
        if status_code in _TRANSIENT_STATUSES or status_code >= 500:
            return GatewayTransientError(message, status_code=status_code, payload=payload)
        return GatewayClientError(message, status_code=status_code, payload=payload)


def _grant_payload(
    gateway_id: str,
    resource_type: str,
    resource_id: str,
    owner_id: str,
    owner_type: PreferenceLevel,
    credential_token: str,
    login_username: str | None,
) -> dict[str, Any]:
    return {
        "resourceType": _enum_value(resource_type),
        "resourceId": resource_id,
        "ownerId": owner_id,
        "ownerType": owner_type.value,
        "gatewayId": gateway_id,
        "credentialToken": credential_token,
        "loginUsername": login_username,
        "enabled": True,
    }


__all__ = [
    "GatewayAuthorizationError",
    "GatewayClient",
    "GatewayClientError",
    "GatewayConflictError",
    "GatewayNotFoundError",
    "GatewayTransientError",
    "GatewayValidationError",
    "extract_error_message",
]
