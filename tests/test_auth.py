# tests/test_auth.py
from datetime import timedelta

from evalhub.core.security import create_access_token, get_password_hash, verify_password
from evalhub.services.user_service import DEFAULT_ROSTER, UserService

from tests.helpers import TEST_PASSWORD


def test_login_returns_profile_and_token(client, people):
    r = client.post("/api/auth/login", json={"email": "owner@company.com", "password": TEST_PASSWORD})
    assert r.status_code == 200
    body = r.json()

    assert body["success"] is True
    assert body["user"] == {
        "id": people["owner"].id,
        "name": "Olivia Owner",
        "email": "owner@company.com",
        "department": "HR",
        "jobTitle": "HR Director",
    }

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "owner@company.com"
    assert "hashedPassword" not in me.json()


def test_login_rejects_bad_password(client, people):
    r = client.post("/api/auth/login", json={"email": "owner@company.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["success"] is False
    assert r.json()["message"] == "Invalid credentials"

    r = client.post("/api/auth/login", json={"email": "ghost@company.com", "password": TEST_PASSWORD})
    assert r.status_code == 401


def test_login_with_malformed_body_is_422(client):
    r = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"


def test_me_requires_valid_token(client, people):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    expired = create_access_token({"sub": people["owner"].id}, expires_delta=timedelta(minutes=-10))
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Session expired"


def test_password_hashing_round_trip():
    hashed = get_password_hash("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)
    assert not verify_password("password123", "plaintext-not-a-hash")


def test_seed_directory_is_idempotent(db_session):
    service = UserService(db_session)
    assert service.seed_directory() == len(DEFAULT_ROSTER) == 21
    assert service.seed_directory() == 0

    users = service.get_users()
    assert len(users) == 21
    assert {u.department for u in users} == {
        "Product", "Engineering", "Marketing", "Sales", "HR", "Finance", "Operations",
    }


def test_list_users_hides_password_hashes(client, people):
    rows = client.get("/api/users").json()
    assert len(rows) == 5
    assert all("hashedPassword" not in row for row in rows)
    assert {"id", "name", "email", "department", "jobTitle"} <= set(rows[0])
