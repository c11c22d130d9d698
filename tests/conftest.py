"""Shared test fixtures and configuration."""
import os

os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from volunteerhub.api.deps import get_db
from volunteerhub.core.rate_limit import limiter, login_tracker
from volunteerhub.core.security import create_access_token
from volunteerhub.db.base import Base
from volunteerhub.main import app
from volunteerhub.services.auth import to_identity
from tests.utils import make_staff

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Switch slowapi off except for tests marked ``rate_limit``."""
    limiter.reset()
    if "rate_limit" in request.keywords:
        yield
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True
    limiter.reset()


@pytest.fixture(autouse=True)
def reset_login_lockouts():
    login_tracker.reset()
    yield
    login_tracker.reset()


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Test client bound to the test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def staff_profile(db_session):
    return make_staff(db_session, first_login=False)


@pytest.fixture
def staff_identity(staff_profile):
    return to_identity(staff_profile)


@pytest.fixture
def staff_client(client, staff_profile):
    """Test client with a signed-in staff cookie."""
    token = create_access_token({"sub": str(staff_profile.id), "role": staff_profile.role})
    client.cookies.set("staff_token", token)
    return client
