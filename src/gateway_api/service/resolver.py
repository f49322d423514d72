"""Effective preference resolution across GATEWAY, GROUP and USER levels."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from gateway_api.db.models import PreferenceRecord
from gateway_api.db.session import run_in_session
from gateway_api.domain.preferences import (
    GroupPreferenceOption,
    PreferenceLevel,
    PreferenceResourceType,
    ResolvedPreferencesResult,
    user_owner_id,
)
from gateway_api.repo.preferences import GroupSelectionRepository, PreferenceRepository
from gateway_api.service.errors import require_text

LOGGER = logging.getLogger(__name__)

_Entry = tuple[str, bool]


def resolve_preferences(
    gateway_prefs: Mapping[str, _Entry],
    group_prefs: Sequence[tuple[str, Mapping[str, _Entry]]],
    user_prefs: Mapping[str, _Entry],
    selections: Optional[Mapping[str, str]] = None,
) -> ResolvedPreferencesResult:
    """Walk the three levels for every key and pick the winning value.

    Each mapping holds ``key -> (value, enforced)``. ``group_prefs`` is ordered;
    the first group that can supply a key wins unless ``selections`` names
    another candidate group for that key.
    """

    selections = selections or {}
    result = ResolvedPreferencesResult()

    keys: list[str] = []
    seen: set[str] = set()
    for source in (gateway_prefs, *(prefs for _, prefs in group_prefs), user_prefs):
        for key in source:
            if key not in seen:
                seen.add(key)
                keys.append(key)

    for key in keys:
        defining = [(group_id, prefs[key]) for group_id, prefs in group_prefs if key in prefs]
        enforced_groups = [(group_id, entry) for group_id, entry in defining if entry[1]]
        candidates = enforced_groups or defining
        group_choice = _pick_group(candidates, selections.get(key))

        gateway_entry = gateway_prefs.get(key)
        user_entry = user_prefs.get(key)

        if gateway_entry is not None and gateway_entry[1]:
            value, level = gateway_entry[0], PreferenceLevel.GATEWAY
        elif enforced_groups:
            value, level = group_choice[1][0], PreferenceLevel.GROUP
        elif user_entry is not None:
            value, level = user_entry[0], PreferenceLevel.USER
        elif group_choice is not None:
            value, level = group_choice[1][0], PreferenceLevel.GROUP
        else:
            value, level = gateway_entry[0], PreferenceLevel.GATEWAY

        result.resolved[key] = value
        result.sources[key] = level

        if level is PreferenceLevel.GROUP and len({entry[0] for _, entry in candidates}) > 1:
            result.conflict_keys.append(key)
            result.conflict_options[key] = [
                GroupPreferenceOption(group_id=group_id, value=entry[0]) for group_id, entry in candidates
            ]

    result.conflict_keys.sort()
    return result


def _pick_group(
    candidates: Sequence[tuple[str, _Entry]],
    selected_group_id: Optional[str],
) -> Optional[tuple[str, _Entry]]:
    if not candidates:
        return None
    if selected_group_id:
        for candidate in candidates:
            if candidate[0] == selected_group_id:
                return candidate
    return candidates[0]


def compute_source_map(
    resolved: Mapping[str, str],
    owner_level: PreferenceLevel,
    owner_prefs: Mapping[str, str],
    gateway_prefs: Mapping[str, str],
) -> dict[str, PreferenceLevel]:
    """Attribute each resolved value to a level by comparing raw values.

    Used by views that only hold one owner's raw values next to the gateway's.
    A value equal at both levels is attributed to the owner.
    """

    sources: dict[str, PreferenceLevel] = {}
    for key, value in resolved.items():
        if owner_level is not PreferenceLevel.GATEWAY and owner_prefs.get(key) == value:
            sources[key] = owner_level
        elif gateway_prefs.get(key) == value:
            sources[key] = PreferenceLevel.GATEWAY
        else:
            sources[key] = owner_level
    return sources


def _to_entries(records: Iterable[PreferenceRecord]) -> dict[str, _Entry]:
    return {record.key: (record.value, bool(record.enforced)) for record in records}


class PreferenceResolver:
    """Loads the three preference levels for a resource and resolves them."""

    def __init__(
        self,
        repo: Optional[PreferenceRepository] = None,
        selection_repo: Optional[GroupSelectionRepository] = None,
    ) -> None:
        self._repo = repo or PreferenceRepository()
        self._selections = selection_repo or GroupSelectionRepository()

    def resolve(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        gateway_id: str,
        user_id: Optional[str] = None,
        group_ids: Optional[Sequence[str]] = None,
    ) -> dict[str, str]:
        return self.resolve_with_conflicts(resource_type, resource_id, gateway_id, user_id, group_ids).resolved

    def resolve_with_sources(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        gateway_id: str,
        user_id: Optional[str] = None,
        group_ids: Optional[Sequence[str]] = None,
    ) -> dict[str, PreferenceLevel]:
        return self.resolve_with_conflicts(resource_type, resource_id, gateway_id, user_id, group_ids).sources

    def resolve_with_conflicts(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        gateway_id: str,
        user_id: Optional[str] = None,
        group_ids: Optional[Sequence[str]] = None,
    ) -> ResolvedPreferencesResult:
        resource_id = require_text(resource_id, "resourceId")
        gateway_id = require_text(gateway_id, "gatewayId")
        groups = _dedupe(group_ids or [])
        user_owner = user_owner_id(user_id.strip(), gateway_id) if user_id and user_id.strip() else None

        def _load(session) -> ResolvedPreferencesResult:
            gateway_prefs = _to_entries(
                self._repo.list_at_level(
                    resource_type=resource_type.value,
                    resource_id=resource_id,
                    owner_id=gateway_id,
                    level=PreferenceLevel.GATEWAY.value,
                    session=session,
                )
            )

            by_group: dict[str, dict[str, _Entry]] = {group_id: {} for group_id in groups}
            for record in self._repo.list_for_owners(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_ids=groups,
                level=PreferenceLevel.GROUP.value,
                session=session,
            ):
                by_group[record.owner_id][record.key] = (record.value, bool(record.enforced))

            user_prefs: dict[str, _Entry] = {}
            selections: dict[str, str] = {}
            if user_owner:
                user_prefs = _to_entries(
                    self._repo.list_at_level(
                        resource_type=resource_type.value,
                        resource_id=resource_id,
                        owner_id=user_owner,
                        level=PreferenceLevel.USER.value,
                        session=session,
                    )
                )
                if len(groups) > 1:
                    selections = {
                        record.selection_key: record.selected_group_id
                        for record in self._selections.list_for_user(
                            gateway_id=gateway_id,
                            user_id=user_owner,
                            resource_type=resource_type.value,
                            resource_id=resource_id,
                            session=session,
                        )
                    }

            return resolve_preferences(
                gateway_prefs,
                [(group_id, by_group[group_id]) for group_id in groups],
                user_prefs,
                selections,
            )

        result = run_in_session(_load)
        if result.conflict_keys:
            LOGGER.debug(
                "Group conflicts for %s %s user=%s: %s",
                resource_type.value,
                resource_id,
                user_owner,
                ", ".join(result.conflict_keys),
            )
        return result


def _dedupe(values: Iterable[str]) -> list[str]:
    ordered: list[str] = []
    for value in values:
        value = (value or "").strip()
        if value and value not in ordered:
            ordered.append(value)
    return ordered


__all__ = ["PreferenceResolver", "compute_source_map", "resolve_preferences"]
