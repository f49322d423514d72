"""
Pytest configuration for the gateway access API tests.
Points the service at a throwaway SQLite database and a static bearer token.
"""

import os
import tempfile

# Must be set before gateway_api.db.session is imported
_test_data_dir = tempfile.mkdtemp(prefix="gateway_api_test_")
os.environ["GATEWAY_DATABASE_URL"] = f"sqlite:///{_test_data_dir}/test.db"
os.environ["GATEWAY_API_DEV_BYPASS_TOKEN"] = "test-admin-token"
os.environ["GATEWAY_API_DEV_BYPASS_SUBJECT"] = "admin"
os.environ["GATEWAY_API_JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from gateway_api.auth.service import create_access_token
from gateway_api.db.base import Base
from gateway_api.db.session import engine

Base.metadata.create_all(engine)


@pytest.fixture(autouse=True)
def clean_database():
    yield
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def client() -> TestClient:
    from gateway_api.app import app

    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer test-admin-token"}


@pytest.fixture
def member_headers():
    """Bearer headers for a plain gateway member called ``alice``."""

    token, _ = create_access_token("alice", ["gateway.member"])
    return {"Authorization": f"Bearer {token}"}
