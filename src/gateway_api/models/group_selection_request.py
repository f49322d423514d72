# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self

from gateway_api.domain.preferences import PreferenceResourceType


class GroupSelectionRequest(BaseModel):
    """
    Picks which group's value applies to one conflicting key for a user.
    """  # noqa: E501

    resource_type: PreferenceResourceType = Field(alias="resourceType")
    resource_id: StrictStr = Field(alias="resourceId")
    selection_key: StrictStr = Field(alias="selectionKey")
    selected_group_id: StrictStr = Field(alias="selectedGroupId")
    user_id: Optional[StrictStr] = Field(default=None, description="Defaults to the caller.", alias="userId")
    __properties: ClassVar[list[str]] = ["resourceType", "resourceId", "selectionKey", "selectedGroupId", "userId"]

    model_config = {
        "populate_by_name": True,
        "validate_assignment": True,
        "protected_namespaces": (),
    }

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> Self:
        if obj is None:
            return None
        return cls.model_validate(obj)
