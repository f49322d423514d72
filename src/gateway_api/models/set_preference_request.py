# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictBool, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self

from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType


class SetPreferenceRequest(BaseModel):
    """
    Upsert of a single preference key at one level.
    """  # noqa: E501

    resource_type: PreferenceResourceType = Field(alias="resourceType")
    resource_id: StrictStr = Field(alias="resourceId")
    owner_id: StrictStr = Field(description="Gateway id, group id or user id depending on level.", alias="ownerId")
    level: PreferenceLevel
    key: StrictStr
    value: StrictStr
    enforced: Optional[StrictBool] = False
    __properties: ClassVar[list[str]] = ["resourceType", "resourceId", "ownerId", "level", "key", "value", "enforced"]

    model_config = {
        "populate_by_name": True,
        "validate_assignment": True,
        "protected_namespaces": (),
    }

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, json_str: str) -> Self:
        return cls.model_validate_json(json_str)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> Self:
        if obj is None:
            return None
        return cls.model_validate(obj)
