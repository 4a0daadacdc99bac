# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["OPEN_EXCHANGE_API_KEY"] = "test-app-id"
os.environ["OPEN_EXCHANGE_API_URL"] = "https://openexchangerates.org/api"

from src.database import get_db
from src.main import app
from src.models.base import Base
from src.services.memory_cache import currencies_cache, response_cache

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def clear_memory_caches():
    """Start every test with empty in-process caches."""
    response_cache.clear()
    currencies_cache.clear()
    yield
    response_cache.clear()
    currencies_cache.clear()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

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
def visitor_client(client):
    """Test client that already carries a known visitor cookie."""
    client.cookies.set("user_id", "visitor-1")
    return client


@pytest.fixture
def latest_rates() -> dict:
    """Sample Open Exchange Rates latest.json payload (USD based)."""
    return {
        "disclaimer": "Usage subject to terms",
        "license": "https://openexchangerates.org/license",
        "timestamp": 1760860800,
        "base": "USD",
        "rates": {
            "EUR": 0.92,
            "GBP": 0.79,
            "JPY": 150.0,
            "USD": 1,
        },
    }
