"""
Shared test fixtures — throw-away SQLite database, test client, a registered tenant.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test_pavequote.db"

from pavequote.database import Base, get_db
from pavequote.main import app


TEST_DATABASE_URL = "sqlite:///./test_pavequote.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Australian Taxation Office (a real, valid ABN)
ATO_ABN = "51 824 753 556"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


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


def tenant_payload(**overrides):
    payload = {
        "name": "Southern Asphalt Pty Ltd",
        "abn": ATO_ABN,
        "gst_registered": True,
        "address_line1": "12 Bitumen Road",
        "suburb": "Dandenong",
        "state": "VIC",
        "postcode": "3175",
        "email": "office@southernasphalt.com.au",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def tenant(client):
    """Register a tenant and return its JSON."""
    response = client.post("/api/tenants/", json=tenant_payload())
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def job(client, tenant):
    """Create a draft job with the default 5% waste factor."""
    response = client.post(f"/api/tenants/{tenant['id']}/jobs/", json={
        "job_type": "resheet",
        "title": "Car park resheet",
    })
    assert response.status_code == 200
    return response.json()
