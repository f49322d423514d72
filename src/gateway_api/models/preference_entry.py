# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, StrictBool, StrictStr
from typing import Any, ClassVar, Dict, Self


class PreferenceEntry(BaseModel):
    """
    A preference stored at exactly one level.
    """  # noqa: E501

    key: StrictStr
    value: StrictStr
    enforced: StrictBool = False
    __properties: ClassVar[list[str]] = ["key", "value", "enforced"]

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
