from __future__ import annotations

from dataclasses import replace

import pytest

from src.timeclock.timeclock.core.exceptions import AuthenticationError, ValidationError
from src.timeclock.timeclock.users.service import AuthService
from tests.fakes import InMemoryUsers, make_user


def test_authenticate_returns_session_user(users_repo):
    s_user = AuthService(users_repo).authenticate("Alice@Example.com", "password123")

    assert s_user.user_id == 1
    assert s_user.to_dict() == {"id": 1, "name": "Alice Employee", "email": "alice@example.com", "isAdmin": False}


def test_authenticate_wrong_password_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("alice@example.com", "wrong")


def test_authenticate_unknown_email_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody@example.com", "password123")


def test_authenticate_requires_email(users_repo):
    with pytest.raises(ValidationError):
        AuthService(users_repo).authenticate("   ", "password123")


def test_placeholder_hash_never_matches():
    user = make_user(5, "Legacy", "legacy@example.com")
    users = InMemoryUsers([replace(user, password_hash="CHANGE_ME")])

    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("legacy@example.com", "CHANGE_ME")


def test_login_logout_flow(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Alice Employee"

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["id"] == 1

    assert client.post("/api/auth/logout").get_json() == {"ok": True}
    assert client.get("/api/auth/me").status_code == 401


def test_login_rejects_bad_credentials(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid credentials"}

    assert client.post("/api/auth/login", json={}).status_code == 400


def test_health(client):
    assert client.get("/api/health").get_json() == {"ok": True}
