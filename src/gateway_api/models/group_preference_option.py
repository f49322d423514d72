# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, Self


class GroupPreferenceOption(BaseModel):
    """
    One group's value for a key that several groups define differently.
    """  # noqa: E501

    group_id: StrictStr = Field(alias="groupId")
    value: StrictStr
    __properties: ClassVar[list[str]] = ["groupId", "value"]

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
