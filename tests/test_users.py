from __future__ import annotations

from tests.conftest import PASSWORD, bearer


class TestCreateUser:
    def test_create(self, client) -> None:
        resp = client.post("/api/users", json={"email": "saul@bettercall.com", "password": "123456"})
        assert resp.status_code == 201
        body = resp.get_json()
        assert set(body) == {"id", "created_at", "updated_at", "email", "is_chirpy_red"}
        assert body["email"] == "saul@bettercall.com"
        assert body["is_chirpy_red"] is False

    def test_duplicate_email_conflicts(self, client, create_user) -> None:
        create_user("saul@bettercall.com")
        resp = client.post("/api/users", json={"email": "SAUL@bettercall.com", "password": "x"})
        assert resp.status_code == 409

    def test_invalid_email(self, client) -> None:
        resp = client.post("/api/users", json={"email": "not-an-email", "password": "x"})
        assert resp.status_code == 422
        assert "email" in resp.get_json()["details"]


class TestUpdateUser:
    def test_update_email_and_password(self, client, login) -> None:
        user = login()
        resp = client.put(
            "/api/users",
            json={"email": "heisenberg@breakingbad.com", "password": "blue-sky"},
            headers=bearer(user["token"]),
        )
        assert resp.status_code == 200
        assert resp.get_json()["email"] == "heisenberg@breakingbad.com"
        assert resp.get_json()["id"] == user["id"]

        old = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": PASSWORD})
        new = client.post("/api/login", json={"email": "heisenberg@breakingbad.com", "password": "blue-sky"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_requires_access_token(self, client, login) -> None:
        user = login()
        payload = {"email": "x@y.com", "password": "p"}
        assert client.put("/api/users", json=payload).status_code == 401
        # refresh tokens are not access tokens
        resp = client.put("/api/users", json=payload, headers=bearer(user["refresh_token"]))
        assert resp.status_code == 401

    def test_cannot_take_another_users_email(self, client, login, create_user) -> None:
        user = login()
        create_user("jesse@breakingbad.com")
        resp = client.put(
            "/api/users",
            json={"email": "jesse@breakingbad.com", "password": "p"},
            headers=bearer(user["token"]),
        )
        assert resp.status_code == 409


def test_lone_surrogate_password_round_trips(client) -> None:
    creds = {"email": "skyler@breakingbad.com", "password": "\ud800"}
    assert client.post("/api/users", json=creds).status_code == 201
    assert client.post("/api/login", json=creds).status_code == 200

    wrong = {"email": "skyler@breakingbad.com", "password": "\ud801"}
    assert client.post("/api/login", json=wrong).status_code == 401
