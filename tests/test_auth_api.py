from app.core.security import decode_token
from tests.conftest import create_account

def register(client, username="alice1", email="a@x.com", password="longpass1"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )

def test_register_creates_user_account(client):
    response = register(client)

    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully"}

def test_register_ignores_role_in_body(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"username": "sneaky", "email": "s@x.com", "password": "longpass1", "role": "ADMIN"},
    )
    assert response.status_code == 201

    users = client.get("/api/admin/users", headers=admin_headers).json()
    assert next(u for u in users if u["email"] == "s@x.com")["role"] == "USER"

def test_register_duplicate_username_conflicts(client):
    register(client)

    response = register(client, email="other@x.com")

    assert response.status_code == 409
    assert response.json()["detail"] == "The username alice1 is already in use."

def test_register_duplicate_email_conflicts(client):
    register(client)

    response = register(client, username="alice2")

    assert response.status_code == 409
    assert response.json()["detail"] == "The email a@x.com is already in use."

def test_register_validation_returns_field_map(client):
    response = register(client, username="abc", email="not-an-email", password="short")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["username"] == "Username must be between 4 and 10 characters"
    assert detail["email"] == "Email must be valid"
    assert detail["password"] == "Password must have at least 8 characters"

def test_register_missing_field(client):
    response = client.post("/api/auth/register", json={"username": "alice1", "email": "a@x.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == {"password": "password is required"}

def test_login_returns_token_for_email(client):
    create_account("alice1", "a@x.com")

    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "longpass1"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert decode_token(body["access_token"]) == "a@x.com"
    assert body["user"]["username"] == "alice1"
    assert body["user"]["role"] == "USER"
    assert "password_hash" not in body["user"]

def test_login_failures_do_not_reveal_which_part_was_wrong(client):
    create_account("alice1", "a@x.com")

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrongpass"})
    unknown_email = client.post("/api/auth/login", json={"email": "no@x.com", "password": "longpass1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["detail"] == unknown_email.json()["detail"]

def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
    assert "X-Process-Time" in response.headers
