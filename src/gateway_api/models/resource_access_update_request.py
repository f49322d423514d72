# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictBool, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self


class ResourceAccessUpdateRequest(BaseModel):
    """
    Partial update of an access grant. Omitted fields are left unchanged.
    """  # noqa: E501

    enabled: Optional[StrictBool] = None
    credential_token: Optional[StrictStr] = Field(default=None, alias="credentialToken")
    login_username: Optional[StrictStr] = Field(default=None, alias="loginUsername")
    __properties: ClassVar[list[str]] = ["enabled", "credentialToken", "loginUsername"]

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
