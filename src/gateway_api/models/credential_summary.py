# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, Optional, Self

from gateway_api.domain.access import CredentialType


class CredentialSummary(BaseModel):
    """
    Public metadata for a stored credential. Secret material is never included.
    """  # noqa: E501

    token: StrictStr
    gateway_id: StrictStr = Field(alias="gatewayId")
    owner_id: StrictStr = Field(alias="ownerId")
    name: StrictStr
    type: CredentialType
    description: Optional[StrictStr] = None
    public_key: Optional[StrictStr] = Field(default=None, alias="publicKey")
    persisted_time: Optional[datetime] = Field(default=None, alias="persistedTime")
    __properties: ClassVar[list[str]] = [
        "token",
        "gatewayId",
        "ownerId",
        "name",
        "type",
        "description",
        "publicKey",
        "persistedTime",
    ]

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
