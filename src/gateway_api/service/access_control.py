"""Merged view of the credentials a user owns or inherits through grants."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Optional, Sequence

from gateway_api.db.models import AccessGrantRecord, CredentialRecord
from gateway_api.db.session import run_in_session
from gateway_api.domain.access import AccessControlEntry, CredentialOwnership, ResourceBinding
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType, user_owner_id
from gateway_api.repo.access_grants import AccessGrantRepository
from gateway_api.repo.credentials import CredentialRepository
from gateway_api.repo.groups import GroupMembershipRepository
from gateway_api.service.errors import require_text

LOGGER = logging.getLogger(__name__)


class AccessControlService:
    def __init__(
        self,
        grant_repo: Optional[AccessGrantRepository] = None,
        credential_repo: Optional[CredentialRepository] = None,
        group_repo: Optional[GroupMembershipRepository] = None,
    ) -> None:
        self._grants = grant_repo or AccessGrantRepository()
        self._credentials = credential_repo or CredentialRepository()
        self._groups = group_repo or GroupMembershipRepository()

    def get_access_control(self, gateway_id: str, user_id: str) -> list[AccessControlEntry]:
        """Return one entry per credential the user can use in ``gateway_id``.

        Credentials the user owns come first and are tagged OWNED even when a
        grant also reaches them. The rest are INHERITED from the most specific
        reachable grant (USER, then GROUP, then GATEWAY).
        """

        gateway_id = require_text(gateway_id, "gatewayId")
        owner = user_owner_id(require_text(user_id, "userId"), gateway_id)

        def _aggregate(session) -> list[AccessControlEntry]:
            group_ids = self._groups.list_user_groups(gateway_id=gateway_id, user_id=owner, session=session)
            owned = self._credentials.list(gateway_id=gateway_id, owner_id=owner, session=session)
            reachable = self._grants.list_reachable(
                gateway_id=gateway_id,
                user_owner_id=owner,
                group_ids=group_ids,
                session=session,
            )

            entries: list[AccessControlEntry] = []
            owned_tokens = {record.token for record in owned}
            if owned:
                gateway_grants = self._grants.list(gateway_id=gateway_id, enabled_only=True, session=session)
                for record in owned:
                    grants = [grant for grant in gateway_grants if grant.credential_token == record.token]
                    entries.append(
                        _build_entry(
                            record.token,
                            record,
                            CredentialOwnership.OWNED,
                            PreferenceLevel.USER,
                            owner,
                            grants,
                        )
                    )

            inherited: OrderedDict[str, list[AccessGrantRecord]] = OrderedDict()
            for grant in reachable:
                if grant.credential_token in owned_tokens:
                    continue
                inherited.setdefault(grant.credential_token, []).append(grant)

            catalog = self._credentials.get_many(inherited.keys(), session=session)
            for token, grants in inherited.items():
                source = _most_specific(grants)
                entries.append(
                    _build_entry(
                        token,
                        catalog.get(token),
                        CredentialOwnership.INHERITED,
                        PreferenceLevel(source.owner_type),
                        source.owner_id,
                        grants,
                    )
                )
            return entries

        entries = run_in_session(_aggregate)
        LOGGER.debug("Access control for %s in %s: %d credential(s)", owner, gateway_id, len(entries))
        return entries


def _most_specific(grants: Sequence[AccessGrantRecord]) -> AccessGrantRecord:
    return min(grants, key=lambda grant: (-PreferenceLevel(grant.owner_type).rank, grant.id))


def _build_entry(
    token: str,
    credential: Optional[CredentialRecord],
    ownership: CredentialOwnership,
    source: PreferenceLevel,
    source_id: str,
    grants: Sequence[AccessGrantRecord],
) -> AccessControlEntry:
    compute: list[ResourceBinding] = []
    storage: list[ResourceBinding] = []
    first: Optional[ResourceBinding] = None
    for grant in grants:
        binding = ResourceBinding(resource_id=grant.resource_id, login_username=grant.login_username)
        target = compute if grant.resource_type == PreferenceResourceType.COMPUTE.value else storage
        if binding in target:
            continue
        target.append(binding)
        if first is None:
            first = binding

    entry = AccessControlEntry(
        token=token,
        ownership=ownership,
        source=source,
        source_id=source_id,
        username=first.login_username if first else None,
        compute_resources=compute,
        storage_resources=storage,
    )
    if credential is not None:
        entry.name = credential.name
        entry.credential_type = credential.credential_type
        entry.description = credential.description
        entry.persisted_at = credential.persisted_at
    return entry


__all__ = ["AccessControlService"]
