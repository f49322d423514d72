"""Service layer."""

from .access_control import AccessControlService
from .access_grants import AccessGrantService
from .audit import AuditEvent, AuditService
from .credentials import CredentialService
from .facade import GatewayServiceFacade, gateway_services, get_gateway_service_facade
from .groups import GroupService
from .preferences import PreferenceService
from .resolver import PreferenceResolver, compute_source_map, resolve_preferences

__all__ = [
    "AccessControlService",
    "AccessGrantService",
    "AuditEvent",
    "AuditService",
    "CredentialService",
    "GatewayServiceFacade",
    "GroupService",
    "PreferenceResolver",
    "PreferenceService",
    "compute_source_map",
    "gateway_services",
    "get_gateway_service_facade",
    "resolve_preferences",
]
