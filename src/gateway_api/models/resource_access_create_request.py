# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictBool, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self


class ResourceAccessCreateRequest(BaseModel):
    """
    Payload for creating an access grant. Fields are validated by the service
    so that a missing credential token is reported like any other blank field.
    """  # noqa: E501

    resource_type: Optional[StrictStr] = Field(default=None, alias="resourceType")
    resource_id: Optional[StrictStr] = Field(default=None, alias="resourceId")
    owner_id: Optional[StrictStr] = Field(default=None, alias="ownerId")
    owner_type: Optional[StrictStr] = Field(default=None, alias="ownerType")
    gateway_id: Optional[StrictStr] = Field(default=None, alias="gatewayId")
    credential_token: Optional[StrictStr] = Field(default=None, alias="credentialToken")
    login_username: Optional[StrictStr] = Field(default=None, alias="loginUsername")
    enabled: Optional[StrictBool] = True
    __properties: ClassVar[list[str]] = [
        "resourceType",
        "resourceId",
        "ownerId",
        "ownerType",
        "gatewayId",
        "credentialToken",
        "loginUsername",
        "enabled",
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
