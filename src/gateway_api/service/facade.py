"""Facade for gateway access services."""

from __future__ import annotations

from functools import lru_cache

from .access_control import AccessControlService
from .access_grants import AccessGrantService
from .audit import AuditService
from .credentials import CredentialService
from .groups import GroupService
from .preferences import PreferenceService
from .resolver import PreferenceResolver


class GatewayServiceFacade:
    def __init__(self) -> None:
        self.audit = AuditService()
        self.preferences = PreferenceService(audit=self.audit)
        self.resolver = PreferenceResolver()
        self.access_grants = AccessGrantService(audit=self.audit)
        self.access_control = AccessControlService()
        self.credentials = CredentialService(audit=self.audit)
        self.groups = GroupService(audit=self.audit)


@lru_cache()
def get_gateway_service_facade() -> GatewayServiceFacade:
    return GatewayServiceFacade()


gateway_services = get_gateway_service_facade()

__all__ = ["GatewayServiceFacade", "gateway_services", "get_gateway_service_facade"]
