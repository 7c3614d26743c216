"""
Global test fixtures for mongo-bootstrap.

This module provides shared fixtures for all tests including:
- In-memory MongoDB server and client (see fakes.py)
- Settings isolated from the environment
- Sample principals and step lists
"""

from typing import Generator

import pytest

from fakes import FakeMongoClient, FakeMongoServer
from mongo_bootstrap.config import Settings, get_settings
from mongo_bootstrap.models import EnsureCollection, EnsurePrincipal, Grant, Principal


# =============================================================================
# MongoDB Fixtures
# =============================================================================

@pytest.fixture
def fake_server() -> FakeMongoServer:
    """Empty in-memory server: no users, no databases."""
    return FakeMongoServer()


@pytest.fixture
def fake_client(fake_server) -> Generator[FakeMongoClient, None, None]:
    """Client bound to fake_server."""
    client = FakeMongoClient(fake_server)
    yield client
    client.close()


@pytest.fixture(autouse=True)
def reset_connection_state():
    """Make sure no test leaks a cached client or settings instance."""
    import mongo_bootstrap.database.connections as conn_module

    conn_module._mongo_client = None
    get_settings.cache_clear()
    yield
    conn_module._mongo_client = None
    get_settings.cache_clear()


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file or process environment overrides."""
    return Settings(
        _env_file=None,
        mongo_uri="mongodb://test:27017",
        admin_username="admin",
        admin_password="password",
        service_db_name="product-service",
        service_username="productAdmin",
        service_password="password",
        service_role="readWrite",
        service_collections=["user"],
        bootstrap_plan_file=None,
        bootstrap_conflict_policy="as_no_op",
        log_level="INFO",
    )


# =============================================================================
# Step Fixtures
# =============================================================================

@pytest.fixture
def admin_step() -> EnsurePrincipal:
    """Root user on admin."""
    return EnsurePrincipal(
        database="admin",
        principal=Principal(
            name="admin",
            credential="password",
            grants=[Grant(role="root", db="admin")],
        ),
    )


@pytest.fixture
def service_user_step() -> EnsurePrincipal:
    """Service user with readWrite on its own database."""
    return EnsurePrincipal(
        database="svc-db",
        principal=Principal(
            name="svcUser",
            credential="s3cret",
            grants=[Grant(role="readWrite", db="svc-db")],
        ),
    )


@pytest.fixture
def user_collection_step() -> EnsureCollection:
    """Base collection that materializes svc-db."""
    return EnsureCollection(database="svc-db", collection="user")


@pytest.fixture
def scenario_steps(admin_step, service_user_step, user_collection_step) -> list:
    """Admin user, service user, base collection - in that order."""
    return [admin_step, service_user_step, user_collection_step]
