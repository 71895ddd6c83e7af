"""
tests/conftest.py -- Shared fixtures for the Chirpy API tests.

Every test gets a fresh app from the factory in testing mode, which points
DBStorage at a new in-memory SQLite database (StaticPool, so all sessions
share one connection). Static files are served from a per-test tmp dir.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from flask import Flask
from flask.testing import FlaskClient

from api import create_app
from models import storage

PASSWORD = "04234"


@pytest.fixture()
def app(tmp_path) -> Flask:
    (tmp_path / "index.html").write_text("<h1>Welcome to Chirpy</h1>")
    app = create_app("testing", FILESERVER_ROOT=str(tmp_path))
    yield app
    storage.close()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def create_user(client: FlaskClient) -> Callable[..., dict]:
    """POST /api/users and return the created user JSON."""

    def _create(email: str = "walt@breakingbad.com", password: str = PASSWORD) -> dict:
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _create


@pytest.fixture()
def login(client: FlaskClient, create_user) -> Callable[..., dict]:
    """Create a user and log in; returns the login JSON (user + tokens)."""

    def _login(email: str = "walt@breakingbad.com", password: str = PASSWORD) -> dict:
        create_user(email, password)
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
