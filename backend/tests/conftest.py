"""
Shared test fixtures for BoxShip tests

Provides database setup, client creation, and user fixtures
"""
import os

# Must be set before app.core.settings is first imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token
from app.core.limiter import limiter
from app.core.status_config import UserRole

from tests import factories

# Disable rate limiting for tests
limiter.enabled = False


# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine):
    """Create all tables for testing using SQLAlchemy metadata"""
    from app.models import BoxType, Country, Shipment, TrackingHistory, User  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables(engine):
    """Drop all tables after testing"""
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test"""
    create_tables(engine)
    factories.reset_sequences()

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        drop_tables(engine)


@pytest.fixture
def db(db_session):
    """Short alias used by most tests"""
    return db_session


@pytest.fixture
def client(db_session):
    """Create a test client with database override"""
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
def admin_user(db_session):
    """Create an administrator for testing"""
    user = factories.create_test_user(
        db_session,
        email="admin@example.com",
        password="AdminPass123!",
        role=UserRole.ADMINISTRATOR.value,
        first_name="Admin",
    )
    db_session.commit()
    return user


@pytest.fixture
def customer_user(db_session):
    """Create a registered user (shipment sender) for testing"""
    user = factories.create_test_user(
        db_session,
        email="customer@example.com",
        password="CustomerPass123!",
        first_name="Customer",
    )
    db_session.commit()
    return user


@pytest.fixture
def other_customer(db_session):
    user = factories.create_test_user(db_session, email="other@example.com", first_name="Other")
    db_session.commit()
    return user


@pytest.fixture
def admin_token(admin_user):
    """Generate an access token for the admin user"""
    return create_access_token(admin_user.id, role=admin_user.role)


@pytest.fixture
def customer_token(customer_user):
    """Generate an access token for the customer user"""
    return create_access_token(customer_user.id, role=customer_user.role)


@pytest.fixture
def admin_headers(admin_token):
    """Return authorization headers for admin user"""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def customer_headers(customer_token):
    """Return authorization headers for customer user"""
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def other_headers(other_customer):
    return {"Authorization": f"Bearer {create_access_token(other_customer.id)}"}


@pytest.fixture
def country(db_session):
    """Active destination with multiplier 2.0"""
    c = factories.create_test_country(db_session, name="Sweden", code="SE", currency="SEK", multiplier="2.0")
    db_session.commit()
    return c


@pytest.fixture
def box_type(db_session):
    """Active box type with base price 49"""
    b = factories.create_test_box_type(db_session, name="Small", base_price="49.00")
    db_session.commit()
    return b
