# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any, ClassVar, Dict, List, Self

from gateway_api.models.access_control_credential import AccessControlCredential


class AccessControlResponse(BaseModel):
    """
    Owned credentials first, then inherited ones.
    """  # noqa: E501

    credentials: List[AccessControlCredential] = Field(default_factory=list)
    __properties: ClassVar[list[str]] = ["credentials"]

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
