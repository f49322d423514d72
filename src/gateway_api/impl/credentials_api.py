from __future__ import annotations

from typing import List, Optional

from pydantic import StrictStr

from gateway_api.apis.credentials_api_base import BaseCredentialsApi
from gateway_api.auth.roles import ACCESS_EDIT_ROLES, SELF_SERVICE_ROLES, require_roles
from gateway_api.domain.access import StoredCredential
from gateway_api.domain.preferences import user_owner_id
from gateway_api.http.errors import bad_request, forbidden, service_error_to_http
from gateway_api.models.credential_create_request import CredentialCreateRequest
from gateway_api.models.credential_summary import CredentialSummary
from gateway_api.models.extra_models import TokenModel
from gateway_api.service.errors import GatewayServiceError
from gateway_api.service.facade import gateway_services


class CredentialsApiImpl(BaseCredentialsApi):
    async def list_credential_summaries(
        self,
        gateway_id: StrictStr,
        owner_id: Optional[StrictStr],
    ) -> List[CredentialSummary]:
        token = require_roles(*SELF_SERVICE_ROLES)
        owner = str(owner_id) if owner_id else None
        if not _is_admin(token):
            # Members only see their own catalog entries.
            owner = token.sub
        try:
            credentials = gateway_services.credentials.list_credentials(str(gateway_id), owner)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return [_to_summary_model(item) for item in credentials]

    async def create_credential(self, credential_create_request: CredentialCreateRequest) -> CredentialSummary:
        token = require_roles(*SELF_SERVICE_ROLES)
        if credential_create_request is None:
            raise bad_request("Missing credential payload.")
        request = credential_create_request
        owner_id = request.owner_id or token.sub
        if not _is_admin(token) and user_owner_id(owner_id, request.gateway_id) != user_owner_id(
            token.sub, request.gateway_id
        ):
            raise forbidden("Insufficient role to store credentials for another owner.")
        try:
            stored = gateway_services.credentials.create_credential(
                gateway_id=request.gateway_id,
                owner_id=owner_id,
                name=request.name,
                credential_type=request.type,
                description=request.description,
                public_key=request.public_key,
                secret=request.secret,
                actor_id=token.sub,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return _to_summary_model(stored)

    async def get_credential_summary(self, token: StrictStr) -> CredentialSummary:
        require_roles(*SELF_SERVICE_ROLES)
        try:
            stored = gateway_services.credentials.get_credential_summary(str(token))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return _to_summary_model(stored)

    async def delete_credential(self, token: StrictStr) -> None:
        caller = require_roles(*SELF_SERVICE_ROLES)
        try:
            if not _is_admin(caller):
                stored = gateway_services.credentials.get_credential_summary(str(token))
                if stored.owner_id != user_owner_id(caller.sub, stored.gateway_id):
                    raise forbidden("Insufficient role to delete another owner's credential.")
            gateway_services.credentials.delete_credential(str(token), actor_id=caller.sub)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None


def _is_admin(token: TokenModel) -> bool:
    return bool(ACCESS_EDIT_ROLES.intersection(token.roles))


def _to_summary_model(credential: StoredCredential) -> CredentialSummary:
    return CredentialSummary(
        token=credential.token,
        gateway_id=credential.gateway_id,
        owner_id=credential.owner_id,
        name=credential.name,
        type=credential.credential_type,
        description=credential.description,
        public_key=credential.public_key,
        persisted_time=credential.persisted_at,
    )
