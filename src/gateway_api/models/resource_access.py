# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self

from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType


class ResourceAccess(BaseModel):
    """
    A credential bound to a compute or storage resource for one owner.
    """  # noqa: E501

    id: StrictInt
    resource_type: PreferenceResourceType = Field(alias="resourceType")
    resource_id: StrictStr = Field(alias="resourceId")
    owner_id: StrictStr = Field(alias="ownerId")
    owner_type: PreferenceLevel = Field(alias="ownerType")
    gateway_id: StrictStr = Field(alias="gatewayId")
    credential_token: StrictStr = Field(alias="credentialToken")
    login_username: Optional[StrictStr] = Field(default=None, alias="loginUsername")
    enabled: StrictBool = True
    created_time: Optional[datetime] = Field(default=None, alias="createdTime")
    updated_time: Optional[datetime] = Field(default=None, alias="updatedTime")
    __properties: ClassVar[list[str]] = [
        "id",
        "resourceType",
        "resourceId",
        "ownerId",
        "ownerType",
        "gatewayId",
        "credentialToken",
        "loginUsername",
        "enabled",
        "createdTime",
        "updatedTime",
    ]

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
