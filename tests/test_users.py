from datetime import timedelta

import jwt

from knowledge_assistant.api.utils import create_access_token, verify_token
from knowledge_assistant.database.config.config import settings
from knowledge_assistant.database.daos import UserDao


def test_register_returns_user_without_password(registered_user):
    assert registered_user["email"] == "ada@example.com"
    assert registered_user["firstName"] == "Ada"
    assert registered_user["lastName"] == "Lovelace"
    assert registered_user["id"]
    assert "password" not in registered_user


def test_register_twice_with_same_email_fails(client, registered_user):
    response = client.post("/api/users/register", json={"email": "ada@example.com", "password": "other"})
    assert response.status_code == 400
    assert response.json()["detail"] == "User with email ada@example.com already exists"


def test_register_accepts_snake_case_fields(client):
    response = client.post(
        "/api/users/register",
        json={"email": "alan@example.com", "password": "pw", "first_name": "Alan"},
    )
    assert response.status_code == 200
    assert response.json()["firstName"] == "Alan"


def test_login_returns_token_and_cookie(client, registered_user):
    response = client.post("/api/users/login", json={"email": "ada@example.com", "password": "s3cret"})
    assert response.status_code == 200
    token = response.json()["token"]
    assert token
    assert "token=" in response.headers["set-cookie"]


def test_login_with_wrong_password_is_rejected(client, registered_user):
    response = client.post("/api/users/login", json={"email": "ada@example.com", "password": "nope"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid credentials"}


def test_login_with_unknown_email_looks_like_wrong_password(client, registered_user):
    response = client.post("/api/users/login", json={"email": "ghost@example.com", "password": "s3cret"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid credentials"}


def test_current_user_from_bearer_token(client, registered_user):
    token = client.post("/api/users/login", json={"email": "ada@example.com", "password": "s3cret"}).json()["token"]
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["id"] == registered_user["id"]


def test_current_user_requires_valid_token(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_get_user(client, registered_user):
    response = client.get(f"/api/users/{registered_user['id']}")
    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"


def test_get_unknown_user_is_not_found(client):
    assert client.get("/api/users/does-not-exist").status_code == 404


def test_update_user_names_and_password(client, registered_user):
    user_id = registered_user["id"]
    response = client.put(f"/api/users/{user_id}", json={"firstName": "Augusta", "password": "n3w"})
    assert response.status_code == 200
    body = response.json()
    assert body["firstName"] == "Augusta"
    assert body["lastName"] == "Lovelace"
    assert body["email"] == "ada@example.com"

    old = client.post("/api/users/login", json={"email": "ada@example.com", "password": "s3cret"})
    new = client.post("/api/users/login", json={"email": "ada@example.com", "password": "n3w"})
    assert old.status_code == 400
    assert new.status_code == 200


def test_update_with_empty_password_keeps_old_one(client, registered_user):
    client.put(f"/api/users/{registered_user['id']}", json={"password": ""})
    response = client.post("/api/users/login", json={"email": "ada@example.com", "password": "s3cret"})
    assert response.status_code == 200


def test_update_unknown_user_is_not_found(client):
    assert client.put("/api/users/missing", json={"firstName": "X"}).status_code == 404


def test_list_users(client, registered_user):
    client.post("/api/users/register", json={"email": "grace@example.com", "password": "pw"})
    response = client.get("/api/users")
    assert response.status_code == 200
    assert sorted(u["email"] for u in response.json()) == ["ada@example.com", "grace@example.com"]


def test_register_race_on_same_email_is_rejected(client, registered_user, monkeypatch):
    monkeypatch.setattr(UserDao, "exists_by_email", staticmethod(lambda s, email: False))
    response = client.post("/api/users/register", json={"email": "ada@example.com", "password": "other"})
    assert response.status_code == 400
    assert response.json()["detail"] == "User with email ada@example.com already exists"


def test_token_expires_after_configured_minutes(client, registered_user):
    token = client.post("/api/users/login", json={"email": "ada@example.com", "password": "s3cret"}).json()["token"]
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert claims["sub"] == registered_user["id"]
    assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_expired_token_is_rejected(client, registered_user):
    token = create_access_token({"sub": registered_user["id"]}, expires_delta=timedelta(seconds=-5))
    assert verify_token(token) is None
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
