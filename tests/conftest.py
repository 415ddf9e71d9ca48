"""Shared test fixtures"""
import os

# Configure the service before any product_api module reads its settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone

import jwt
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from product_api.application import create_app
from product_api.auth.verifier import JWTTokenVerifier
from product_api.core.config import Config
from product_api.db.models import AppUser, Base, Product
from product_api.db.session import Database

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

USERS = [
    {"id": 1, "email": "admin@example.com", "first_name": "Alice", "role": "admin"},
    {"id": 2, "email": "editor@example.com", "first_name": "Eddie", "role": "editor"},
    {"id": 3, "email": "viewer@example.com", "first_name": "Vera", "role": "user"},
]

PRODUCTS = [
    {"id": 1, "category_id": 1, "name": "Espresso Cup", "price": 6.5, "stock": 120},
    {"id": 2, "category_id": 1, "name": "Milk Jug", "price": 14.0, "stock": 40},
    {"id": 42, "category_id": 2, "name": "Hand Grinder", "price": 39.99, "stock": 15},
]


@pytest.fixture
def test_settings():
    """Settings used by the application under test"""
    return Config(
        environment="test",
        telemetry_enabled=False,
        jwt_secret=TEST_SECRET,
        jwt_algorithm="HS256",
    )


@pytest.fixture
def make_token():
    """Factory for signed tokens; expired=True issues one that is already expired"""

    def _make_token(
        email=None,
        sub=None,
        permissions=None,
        roles=None,
        expired=False,
        secret=TEST_SECRET,
    ):
        now = datetime.now(timezone.utc)
        exp = now - timedelta(minutes=5) if expired else now + timedelta(minutes=5)
        claims = {"iat": now - timedelta(minutes=10), "exp": exp}
        if email is not None:
            claims["email"] = email
        if sub is not None:
            claims["sub"] = sub
        if permissions is not None:
            claims["permissions"] = permissions
        if roles is not None:
            claims["roles"] = roles
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def verifier():
    return JWTTokenVerifier(secret=TEST_SECRET, algorithms=["HS256"])


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'products.db'}"


@pytest.fixture
def seeded_database_url(tmp_path, database_url):
    """Database file with the tables created and the sample rows inserted"""
    engine = create_engine(f"sqlite:///{tmp_path / 'products.db'}")
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(AppUser.__table__.insert(), USERS)
        conn.execute(Product.__table__.insert(), PRODUCTS)
    engine.dispose()
    return database_url


@pytest_asyncio.fixture
async def database(seeded_database_url):
    """Connected store handle over the seeded database"""
    db = Database(seeded_database_url)
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
def app(test_settings, seeded_database_url, verifier):
    return create_app(
        settings=test_settings,
        database=Database(seeded_database_url),
        token_verifier=verifier,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_header():
    """Build an Authorization header for a token"""

    def _auth_header(token):
        return {"Authorization": f"Bearer {token}"}

    return _auth_header
