# coding: utf-8

"""
    Gateway Access API (v1)
"""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field, StrictStr
from typing import Any, ClassVar, Dict, List, Optional, Self

from gateway_api.domain.access import CredentialOwnership
from gateway_api.domain.preferences import PreferenceLevel
from gateway_api.models.resource_binding import ResourceBinding


class AccessControlCredential(BaseModel):
    """
    One credential in a user's access-control view, owned or inherited.
    """  # noqa: E501

    token: StrictStr
    name: Optional[StrictStr] = None
    username: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    persisted_time: Optional[datetime] = Field(default=None, alias="persistedTime")
    ownership: CredentialOwnership
    source: PreferenceLevel
    source_id: StrictStr = Field(alias="sourceId")
    compute_resources: List[ResourceBinding] = Field(default_factory=list, alias="computeResources")
    storage_resources: List[ResourceBinding] = Field(default_factory=list, alias="storageResources")
    __properties: ClassVar[list[str]] = [
        "token",
        "name",
        "username",
        "type",
        "description",
        "persistedTime",
        "ownership",
        "source",
        "sourceId",
        "computeResources",
        "storageResources",
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
