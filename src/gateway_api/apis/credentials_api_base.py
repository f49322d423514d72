# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictStr
from typing import Optional
from gateway_api.models.credential_create_request import CredentialCreateRequest
from gateway_api.models.credential_summary import CredentialSummary


class BaseCredentialsApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseCredentialsApi.subclasses = BaseCredentialsApi.subclasses + (cls,)
    async def list_credential_summaries(
        self,
        gateway_id: StrictStr,
        owner_id: Optional[StrictStr],
    ) -> List[CredentialSummary]:
        ...


    async def create_credential(
        self,
        credential_create_request: CredentialCreateRequest,
    ) -> CredentialSummary:
        ...


    async def get_credential_summary(
        self,
        token: StrictStr,
    ) -> CredentialSummary:
        ...


    async def delete_credential(
        self,
        token: StrictStr,
    ) -> None:
        ...
