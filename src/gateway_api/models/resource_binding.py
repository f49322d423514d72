# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self


class ResourceBinding(BaseModel):
    """
    A resource reachable with a credential and the login used there.
    """  # noqa: E501

    resource_id: StrictStr = Field(alias="resourceId")
    login_username: Optional[StrictStr] = Field(default=None, alias="loginUsername")
    __properties: ClassVar[list[str]] = ["resourceId", "loginUsername"]

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
