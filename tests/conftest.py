"""
Shared test fixtures: SQLite test database, test client, pricing helpers.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from courtquote.catalog import DEFAULT_PRICING, PricingCatalog, clear_catalog_cache, seed_pricing
from courtquote.database import Base, get_db
from courtquote.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False, "timeout": 30})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after. Catalogs are cached per process."""
    clear_catalog_cache()
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    clear_catalog_cache()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pricing(db):
    """Seed the default pricing catalog."""
    seed_pricing(db, "default")
    return DEFAULT_PRICING


@pytest.fixture
def sample_catalog():
    """In-memory catalog with the default rates, no database."""
    return PricingCatalog(DEFAULT_PRICING)


def sample_client_info():
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "+91 9876543210",
        "address": "12 MG Road, Bangalore",
    }


def legacy_request(**overrides):
    """Tennis court submission in the legacy shape: flat lighting/roof, list features."""
    request = {
        "clientInfo": sample_client_info(),
        "projectInfo": {
            "constructionType": "standard",
            "sport": "tennis",
            "courtSize": "standard",
            "customArea": 0,
        },
        "requirements": {
            "base": {"type": "concrete"},
            "flooring": {"type": "acrylic"},
            "equipment": [],
            "lighting": {"required": False},
            "roof": {"required": False},
            "additionalFeatures": [],
        },
    }
    request.update(overrides)
    return request


def current_request(**feature_overrides):
    """Tennis court submission in the current shape: additionalFeatures object."""
    features = {
        "drainage": {"required": False},
        "fencing": {"required": False},
        "lighting": {"required": False},
        "shed": {"required": False},
    }
    features.update(feature_overrides)
    return {
        "clientInfo": sample_client_info(),
        "projectInfo": {
            "constructionType": "standard",
            "sport": "tennis",
            "courtSize": "standard",
            "customArea": 0,
            "courtType": "outdoor",
        },
        "requirements": {
            "base": {"type": "concrete"},
            "flooring": {"type": "acrylic"},
            "equipment": [],
            "additionalFeatures": features,
        },
    }
