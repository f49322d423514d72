# coding: utf-8

"""
    Gateway Access API (v1)

    Multi-level preferences, credential access grants and access-control views for science gateways.
"""  # noqa: E501


from fastapi import FastAPI

from gateway_api.apis.credentials_api import router as CredentialsApiRouter
from gateway_api.apis.groups_api import router as GroupsApiRouter
from gateway_api.apis.preferences_api import router as PreferencesApiRouter
from gateway_api.apis.resource_access_api import router as ResourceAccessApiRouter

app = FastAPI(
    title="Gateway Access API",
    description="Multi-level preferences, credential access grants and access-control views for science gateways.",
    version="1.0.0",
)

app.include_router(PreferencesApiRouter)
app.include_router(ResourceAccessApiRouter)
app.include_router(CredentialsApiRouter)
app.include_router(GroupsApiRouter)
