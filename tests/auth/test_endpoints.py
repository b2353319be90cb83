"""Tests for authentication endpoints.

Tests registration, login, profile, and logout over HTTP, with the
session carried by the test client's cookie jar.
"""

import sqlite3

import pytest
from flask import Flask

ALICE = {
    "username": "alice",
    "password": "password123",
    "password_confirmation": "password123",
    "first_name": "A",
    "last_name": "L",
}


def _register(client, **overrides):
    data = dict(ALICE)
    data.update(overrides)
    return client.post("/register", json=data)


def _error_messages(response) -> list[str]:
    return [e["message"] for e in response.get_json()["error"]["details"]["errors"]]


def _error_fields(response) -> list[str]:
    return [e["field"] for e in response.get_json()["error"]["details"]["errors"]]


# ============================================================================
# Registration Endpoint
# ============================================================================


class TestRegister:
    """Tests for POST /register endpoint."""

    def test_register_success(self, client: Flask.test_client):
        response = _register(client)
        assert response.status_code == 200

        data = response.get_json()
        assert data["message"] == "User created and logged in"
        assert data["user"]["username"] == "alice"
        assert data["user"]["first_name"] == "A"
        assert data["user"]["last_name"] == "L"
        assert isinstance(data["user"]["id"], int)
        assert "password" not in data["user"]

    def test_register_establishes_usable_session(self, client: Flask.test_client):
        _register(client)

        response = client.get("/profile")
        assert response.status_code == 200
        assert response.get_json()["user"]["username"] == "alice"

    def test_register_password_mismatch(self, client: Flask.test_client):
        response = _register(client, password_confirmation="password456")
        assert response.status_code == 400

        data = response.get_json()
        assert data["error"]["type"] == "ValidationError"
        assert "password_confirmation" in _error_fields(response)
        assert "passwords do not match" in _error_messages(response)

    @pytest.mark.parametrize("username", ["ab", "a" * 21])
    def test_register_bad_username_length(self, client: Flask.test_client, username):
        response = _register(client, username=username)
        assert response.status_code == 400
        assert "username" in _error_fields(response)

    def test_register_reports_all_errors(self, client: Flask.test_client):
        """Every violated constraint should appear in one response."""
        response = client.post("/register", json={
            "username": "ab",
            "password": "short",
            "password_confirmation": "nope",
        })
        assert response.status_code == 400

        fields = _error_fields(response)
        for field in ("username", "password", "password_confirmation", "first_name", "last_name"):
            assert field in fields

    def test_register_masks_passwords_in_error(self, client: Flask.test_client):
        response = _register(client, username="ab")
        received = response.get_json()["error"]["details"]["received"]

        assert received["username"] == "ab"
        assert received["password"] != ALICE["password"]
        assert received["password_confirmation"] != ALICE["password"]

    def test_register_duplicate_username(self, client: Flask.test_client):
        _register(client)
        response = _register(client, first_name="Other")

        assert response.status_code == 400
        assert _error_fields(response) == ["username"]
        assert response.get_json()["error"]["details"]["model"] == "UserRegistration"

    def test_register_store_failure_returns_generic_500(self, client: Flask.test_client, monkeypatch):
        """An unexpected store error should surface as a generic 500."""
        from recipe_finder.db.user import UserOperations
        from recipe_finder.main import app

        def failing_create(self, *args, **kwargs):
            raise sqlite3.IntegrityError("disk full")

        monkeypatch.setattr(UserOperations, "create", failing_create)
        monkeypatch.setitem(app.config, "TESTING", False)

        response = _register(client)

        assert response.status_code == 500
        assert response.get_json() == {
            "error": {
                "type": "InternalServerError",
                "message": "An internal error occurred",
            }
        }
        assert client.get("/profile").status_code == 401

    def test_register_failed_validation_sets_no_session(self, client: Flask.test_client):
        _register(client, password_confirmation="password456")
        assert client.get("/profile").status_code == 401


# ============================================================================
# Login Endpoint
# ============================================================================


class TestLogin:
    """Tests for POST /login endpoint."""

    def test_login_success(self, registered_client):
        client, user = registered_client
        client.post("/logout")

        response = client.post(
            "/login",
            json={"username": "alice", "password": "password123"}
        )
        assert response.status_code == 200

        data = response.get_json()
        assert data["message"] == "Logged in"
        assert data["user"]["id"] == user["id"]
        assert data["user"]["username"] == "alice"
        assert "password" not in data["user"]

    def test_login_establishes_session(self, registered_client):
        client, _user = registered_client
        client.post("/logout")

        client.post("/login", json={"username": "alice", "password": "password123"})
        assert client.get("/profile").status_code == 200

    def test_login_wrong_password(self, registered_client):
        client, _user = registered_client
        client.post("/logout")

        response = client.post(
            "/login",
            json={"username": "alice", "password": "wrongpass"}
        )
        assert response.status_code == 403

        data = response.get_json()
        assert data["error"]["type"] == "Forbidden"
        assert data["error"]["message"] == "Incorrect username or password"
        assert client.get("/profile").status_code == 401

    def test_login_unknown_username(self, client: Flask.test_client):
        response = client.post(
            "/login",
            json={"username": "nobody", "password": "password123"}
        )
        assert response.status_code == 404

        data = response.get_json()
        assert data["error"]["type"] == "ResourceNotFound"
        assert data["error"]["message"] == "Incorrect username or password"

    def test_login_missing_fields(self, client: Flask.test_client):
        response = client.post("/login", json={})
        assert response.status_code == 400
        assert set(_error_fields(response)) == {"username", "password"}

    def test_login_empty_strings(self, client: Flask.test_client):
        response = client.post("/login", json={"username": "", "password": ""})
        assert response.status_code == 400
        assert set(_error_fields(response)) == {"username", "password"}

    def test_login_accepts_form_data(self, registered_client):
        client, _user = registered_client
        response = client.post(
            "/login",
            data={"username": "alice", "password": "password123"}
        )
        assert response.status_code == 200


# ============================================================================
# Profile and Logout Endpoints
# ============================================================================


class TestProfile:
    """Tests for GET /profile endpoint."""

    def test_profile_matches_registration(self, registered_client):
        client, user = registered_client

        response = client.get("/profile")
        assert response.status_code == 200

        data = response.get_json()
        assert data["user"] == {
            "id": user["id"],
            "username": "alice",
            "first_name": "A",
            "last_name": "L",
        }

    def test_profile_without_session(self, client: Flask.test_client):
        response = client.get("/profile")
        assert response.status_code == 401

        data = response.get_json()
        assert data["error"]["type"] == "AuthenticationError"

    def test_profile_for_deleted_user(self, registered_client):
        client, user = registered_client

        from recipe_finder.db import get_core
        with get_core(atomic=True) as core:
            core._conn.execute("DELETE FROM users WHERE id = ?", (user["id"],))

        response = client.get("/profile")
        assert response.status_code == 404


class TestLogout:
    """Tests for POST /logout endpoint."""

    def test_logout_clears_session(self, registered_client):
        client, _user = registered_client

        response = client.post("/logout")
        assert response.status_code == 200
        assert response.get_json()["message"] == "Logged out"
        assert client.get("/profile").status_code == 401

    def test_logout_without_session(self, client: Flask.test_client):
        response = client.post("/logout")
        assert response.status_code == 200
