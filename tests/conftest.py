import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set testing environment before the app reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

from eduappoint.main import app  # noqa: E402
from eduappoint.core.database import get_db, Base  # noqa: E402
from eduappoint.core.security import get_password_hash  # noqa: E402
from eduappoint.models.user import User  # noqa: E402

# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

DEFAULT_PASSWORD = "TestPassword123"

@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(test_db):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def register(client):
    """Register a user through the API and return the response body."""
    def _register(name: str, email: str, role: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = client.post("/users/register", json={
            "name": name,
            "email": email,
            "password": password,
            "role": role,
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _register

@pytest.fixture
def student(register):
    return register("Sam Student", "sam@example.com", "student")

@pytest.fixture
def other_student(register):
    return register("Olive Student", "olive@example.com", "student")

@pytest.fixture
def teacher(register):
    return register("Tina Teacher", "tina@example.com", "teacher")

@pytest.fixture
def other_teacher(register):
    return register("Theo Teacher", "theo@example.com", "teacher")

@pytest.fixture
def admin(register):
    return register("Ada Admin", "ada@example.com", "admin")

@pytest.fixture
def seeded_admin(client):
    """An admin created directly in the database, then logged in."""
    db = TestingSessionLocal()
    try:
        db.add(User.new_admin("Root Admin", "root@example.com", get_password_hash(DEFAULT_PASSWORD)))
        db.commit()
    finally:
        db.close()
    response = client.post("/users/login", json={"email": "root@example.com", "password": DEFAULT_PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()
