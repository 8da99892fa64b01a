from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from enterprise_directory.core.config import DefaultUsersSettings, Settings
from enterprise_directory.core.database import Database
from enterprise_directory.core.dependencies import get_auth_context
from enterprise_directory.main import app
from enterprise_directory.models.auth import AuthContext, Roles
from enterprise_directory.services.employee_service import EmployeeService
from enterprise_directory.services.identity_store import IdentityStore

IN_MEMORY_DB = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def default_users():
    return DefaultUsersSettings(
        ADMIN_EMAIL="admin@example.com",
        ADMIN_PASSWORD="Admin-Passw0rd!",
        READ_ONLY_EMAIL="reader@example.com",
        READ_ONLY_PASSWORD="Reader-Passw0rd!",
    )


@pytest.fixture(autouse=True)
def _app_settings(default_users):
    from enterprise_directory.core.config import settings

    original_url = settings.DATABASE_URL
    original_users = settings.DEFAULT_USERS
    original_secret = settings.JWT_SECRET_KEY
    settings.DATABASE_URL = IN_MEMORY_DB
    settings.DEFAULT_USERS = default_users
    settings.JWT_SECRET_KEY = "test-secret"
    yield
    settings.DATABASE_URL = original_url
    settings.DEFAULT_USERS = original_users
    settings.JWT_SECRET_KEY = original_secret


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def mock_admin():
    return AuthContext(id="admin-1", email="admin@example.com", roles=[Roles.ADMIN])


@pytest.fixture
def mock_reader():
    return AuthContext(id="reader-1", email="reader@example.com", roles=[Roles.READ_ONLY])


@pytest.fixture
def admin_client(mock_admin):
    app.dependency_overrides[get_auth_context] = lambda: mock_admin
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def reader_client(mock_reader):
    app.dependency_overrides[get_auth_context] = lambda: mock_reader
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def db():
    database = Database()
    await database.initialize(Settings(DATABASE_URL=IN_MEMORY_DB))
    yield database
    await database.close()


@pytest.fixture
async def employees(db):
    service = EmployeeService()
    await service.initialize(db)
    yield service
    await service.close()


@pytest.fixture
async def identity(db):
    store = IdentityStore()
    await store.initialize(db)
    yield store
    await store.close()
