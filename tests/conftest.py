"""Shared test fixtures for recipe-finder-core."""

import os
import tempfile
import sqlite3
from pathlib import Path

import pytest

from recipe_finder.main import app
from recipe_finder.config import settings
from recipe_finder.db.user import UserOperations


ALICE = {
    "username": "alice",
    "password": "password123",
    "password_confirmation": "password123",
    "first_name": "A",
    "last_name": "L",
}


@pytest.fixture(autouse=True)
def fast_bcrypt():
    """Use the minimum bcrypt work factor so hashing stays fast in tests."""
    original = settings.bcrypt_work_factor
    settings.bcrypt_work_factor = 4
    yield
    settings.bcrypt_work_factor = original


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    schema_path = Path(__file__).parent.parent / "recipe_finder" / "schema" / "schema.sql"

    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")

    with open(schema_path, "r") as f:
        schema_sql = f.read()
    db.executescript(schema_sql)
    db.commit()

    yield db

    db.close()


@pytest.fixture
def users(test_db):
    """User store backed by the in-memory database."""
    return UserOperations(test_db)


@pytest.fixture
def client():
    """Create test client for API testing.

    Uses a temp file database so every connection opened during a request
    sees the same data. Each test gets a fresh database.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    original_db_path = settings.database_path
    try:
        settings.database_path = db_path

        from recipe_finder.db import init_db
        init_db()

        app.config['TESTING'] = True
        with app.test_client() as client:
            yield client

    finally:
        settings.database_path = original_db_path

        if os.path.exists(db_path):
            os.unlink(db_path)


@pytest.fixture
def registered_client(client):
    """Test client whose session belongs to a freshly registered "alice".

    Returns a tuple of (client, user) where user is the JSON user object
    from the registration response.
    """
    response = client.post("/register", json=ALICE)
    assert response.status_code == 200
    return client, response.get_json()["user"]
