"""Service layer for gateway group membership."""

from __future__ import annotations

from typing import Optional

from gateway_api.service.audit import AuditService
from gateway_api.db.session import run_in_session
from gateway_api.domain.preferences import user_owner_id
from gateway_api.repo.groups import GroupMembershipRepository
from gateway_api.service.errors import require_text


class GroupService:
    """Members are stored under their ``user@gateway`` owner id."""

    def __init__(
        self,
        repo: Optional[GroupMembershipRepository] = None,
        audit: Optional[AuditService] = None,
    ) -> None:
        self._repo = repo or GroupMembershipRepository()
        self._audit = audit or AuditService()

    def add_member(self, gateway_id: str, group_id: str, user_id: str, *, actor_id: Optional[str] = None) -> str:
        gateway_id = require_text(gateway_id, "gatewayId")
        group_id = require_text(group_id, "groupId")
        member = user_owner_id(require_text(user_id, "userId"), gateway_id)

        def _add(session) -> None:
            self._repo.add(gateway_id=gateway_id, group_id=group_id, user_id=member, session=session)

        run_in_session(_add)
        self._audit.record_event(
            actor_id=actor_id,
            action="group.member_add",
            target_type="group",
            target_id=group_id,
            metadata={"gatewayId": gateway_id, "userId": member},
        )
        return member

    def remove_member(self, gateway_id: str, group_id: str, user_id: str, *, actor_id: Optional[str] = None) -> None:
        gateway_id = require_text(gateway_id, "gatewayId")
        group_id = require_text(group_id, "groupId")
        member = user_owner_id(require_text(user_id, "userId"), gateway_id)

        def _remove(session) -> None:
            self._repo.remove(gateway_id=gateway_id, group_id=group_id, user_id=member, session=session)

        run_in_session(_remove)
        self._audit.record_event(
            actor_id=actor_id,
            action="group.member_remove",
            target_type="group",
            target_id=group_id,
            metadata={"gatewayId": gateway_id, "userId": member},
        )

    def list_user_groups(self, gateway_id: str, user_id: str) -> list[str]:
        gateway_id = require_text(gateway_id, "gatewayId")
        member = user_owner_id(require_text(user_id, "userId"), gateway_id)

        def _list(session) -> list[str]:
            return self._repo.list_user_groups(gateway_id=gateway_id, user_id=member, session=session)

        return run_in_session(_list)

    def list_members(self, gateway_id: str, group_id: str) -> list[str]:
        gateway_id = require_text(gateway_id, "gatewayId")
        group_id = require_text(group_id, "groupId")

        def _list(session) -> list[str]:
            records = self._repo.list_members(gateway_id=gateway_id, group_id=group_id, session=session)
            return [record.user_id for record in records]

        return run_in_session(_list)


__all__ = ["GroupService"]
