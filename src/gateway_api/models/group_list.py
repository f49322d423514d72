# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, List, Self


class GroupList(BaseModel):
    """
    Groups a user belongs to, in the order they were joined.
    """  # noqa: E501

    group_ids: List[StrictStr] = Field(default_factory=list, alias="groupIds")
    __properties: ClassVar[list[str]] = ["groupIds"]

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
