"""
Shared pytest fixtures.

Settings are read once at import time, so the environment is prepared
before anything from the app package is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-0123"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models import UserRole
from app.repositories import TaskRepository, UserRepository
from app.services import TaskService, UserService

DEFAULT_PASSWORD = "longpass1"

@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def user_service(db_session):
    return UserService(UserRepository(db_session), TaskRepository(db_session))

@pytest.fixture
def task_service(db_session):
    return TaskService(TaskRepository(db_session), UserRepository(db_session))

@pytest.fixture
def client():
    return TestClient(app)

def create_account(username, email, password=DEFAULT_PASSWORD, role=UserRole.USER):
    """Insert an account directly, bypassing the API (the only way to seed the first admin)"""
    db = SessionLocal()
    try:
        user = UserService(UserRepository(db), TaskRepository(db)).register(
            username=username, password=password, email=email, role=role
        )
        return user.id
    finally:
        db.close()

def login(client, email, password=DEFAULT_PASSWORD):
    """Log in through the API and return the Authorization header"""
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

@pytest.fixture
def user_headers(client):
    create_account("alice1", "a@x.com")
    return login(client, "a@x.com")

@pytest.fixture
def other_user_headers(client):
    create_account("bobby", "b@y.com")
    return login(client, "b@y.com")

@pytest.fixture
def admin_headers(client):
    create_account("root", "admin@x.com", role=UserRole.ADMIN)
    return login(client, "admin@x.com")
