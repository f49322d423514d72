# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, List, Self


class AccessibleResources(BaseModel):
    """
    Resource ids a user can reach through gateway, group or user grants.
    """  # noqa: E501

    resource_ids: List[StrictStr] = Field(default_factory=list, alias="resourceIds")
    __properties: ClassVar[list[str]] = ["resourceIds"]

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
