"""Pytest configuration for recruit CRM tests."""

import os

# Must be set before recruit_crm reads its settings
os.environ["TESTING"] = "1"
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

import recruit_crm.models  # noqa: F401
from recruit_crm.auth.utils import create_access_token, create_profile
from recruit_crm.core.base import Base
from recruit_crm.core.database import build_engine, get_db
from recruit_crm.core.session_context import RequestContext
from recruit_crm.main import create_app
from recruit_crm.models.organization import Organization


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a database session bound to the test engine."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    yield session
    session.close()


def _organization(db, name):
    organization = Organization(name=name)
    db.add(organization)
    db.commit()
    db.refresh(organization)
    return organization


@pytest.fixture
def org_a(db_session):
    return _organization(db_session, "Acme Recruiting")


@pytest.fixture
def org_b(db_session):
    return _organization(db_session, "Globex Talent")


@pytest.fixture
def profile_a(db_session, org_a):
    return create_profile(
        db_session, "alice@acme.test", "secret-a", organization_id=org_a.id,
        first_name="Alice", last_name="Archer", role="admin"
    )


@pytest.fixture
def profile_b(db_session, org_b):
    return create_profile(
        db_session, "bob@globex.test", "secret-b", organization_id=org_b.id,
        first_name="Bob", last_name="Baker", role="recruiter"
    )


@pytest.fixture
def profile_unprovisioned(db_session):
    return create_profile(db_session, "nobody@nowhere.test", "secret-n")


@pytest.fixture
def ctx_a(profile_a):
    return RequestContext(user_id=profile_a.id, organization_id=profile_a.organization_id)


@pytest.fixture
def ctx_b(profile_b):
    return RequestContext(user_id=profile_b.id, organization_id=profile_b.organization_id)


@pytest.fixture
def ctx_none(profile_unprovisioned):
    return RequestContext(user_id=profile_unprovisioned.id)


@pytest.fixture
def app(db_session):
    """Application whose requests share the test session."""
    app = create_app(initialize_database=False)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def auth_headers(profile):
    token = create_access_token({"sub": str(profile.id), "email": profile.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_a(profile_a):
    return auth_headers(profile_a)


@pytest.fixture
def headers_b(profile_b):
    return auth_headers(profile_b)


@pytest.fixture
def headers_none(profile_unprovisioned):
    return auth_headers(profile_unprovisioned)


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "property_test: mark test as a property-based test"
    )
    config.addinivalue_line(
        "markers", "database: mark test as requiring database access"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "property_based" in str(item.fspath):
            item.add_marker(pytest.mark.property_test)
