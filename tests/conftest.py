"""
Test configuration for pytest
"""

import pytest
import os
from typing import Generator

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["SEED_ADMIN"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from hvacpro.core.auth import hash_password
from hvacpro.core.database import get_session
from hvacpro.main import app
from hvacpro.models import Contractor, ContractorStatus, User, UserRole
from hvacpro.services.slugs import slugify
from hvacpro.storage import DatabaseStorage, MemStorage

DEFAULT_PASSWORD = "secret123"

# One in-memory SQLite database shared by the test code and the app
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def storage(db):
    return DatabaseStorage(db)


@pytest.fixture
def mem():
    return MemStorage()


@pytest.fixture(params=["database", "memory"])
def any_storage(request, db):
    """Run a test against both storage implementations"""
    if request.param == "database":
        return DatabaseStorage(db)
    return MemStorage()


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    """API client whose requests share the test database session"""

    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_contractor(storage):
    def _make(name="Acme Heating & Air", status=ContractorStatus.CLIENT, slug=None, **fields):
        return storage.add(Contractor(name=name, slug=slug or slugify(name), status=status, **fields))
    return _make


@pytest.fixture
def make_user(storage):
    def _make(username, role=UserRole.CONTRACTOR, contractor_id=None, password=DEFAULT_PASSWORD, **fields):
        return storage.add(User(
            username=username,
            password_hash=hash_password(password),
            email=f"{username}@example.com",
            role=role,
            contractor_id=contractor_id,
            **fields,
        ))
    return _make


@pytest.fixture
def login(client):
    """Log in and return bearer headers; the session cookie is dropped"""
    def _login(username, password=DEFAULT_PASSWORD):
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}
    return _login


@pytest.fixture
def admin_headers(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    return login("admin")


@pytest.fixture
def tenant(make_contractor, make_user, login):
    """A client contractor with a signed-in owner"""
    contractor = make_contractor("Acme Heating & Air")
    make_user("acme", contractor_id=contractor.id)
    return contractor, login("acme")


@pytest.fixture
def other_tenant(make_contractor, make_user, login):
    contractor = make_contractor("Polar Cooling Co")
    make_user("polar", contractor_id=contractor.id)
    return contractor, login("polar")
