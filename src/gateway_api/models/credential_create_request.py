# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self


class CredentialCreateRequest(BaseModel):
    """
    Stores a new credential. ``ownerId`` defaults to the caller; pass the
    gateway id to create a gateway-owned credential.
    """  # noqa: E501

    gateway_id: StrictStr = Field(alias="gatewayId")
    owner_id: Optional[StrictStr] = Field(default=None, alias="ownerId")
    name: StrictStr
    type: StrictStr
    description: Optional[StrictStr] = None
    public_key: Optional[StrictStr] = Field(default=None, alias="publicKey")
    secret: Optional[StrictStr] = None
    __properties: ClassVar[list[str]] = ["gatewayId", "ownerId", "name", "type", "description", "publicKey", "secret"]

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
