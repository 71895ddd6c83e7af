from __future__ import annotations

import uuid

import pytest

from api import create_app


def _key(app) -> dict:
    return {"Authorization": f"ApiKey {app.config['POLKA_KEY']}"}


def _upgrade(user_id: str) -> dict:
    return {"event": "user.upgraded", "data": {"user_id": user_id}}


class TestPolkaWebhook:
    def test_upgrade_marks_user_red(self, app, client, login) -> None:
        user = login()
        resp = client.post("/api/polka/webhooks", json=_upgrade(user["id"]), headers=_key(app))
        assert resp.status_code == 204

        relogin = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "04234"})
        assert relogin.get_json()["is_chirpy_red"] is True

    def test_other_events_are_acknowledged_and_ignored(self, app, client, login) -> None:
        user = login()
        payload = {"event": "user.payment_failed", "data": {"user_id": user["id"]}}
        assert client.post("/api/polka/webhooks", json=payload, headers=_key(app)).status_code == 204

        relogin = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "04234"})
        assert relogin.get_json()["is_chirpy_red"] is False

    def test_unknown_user(self, app, client) -> None:
        resp = client.post("/api/polka/webhooks", json=_upgrade(str(uuid.uuid4())), headers=_key(app))
        assert resp.status_code == 404

    def test_upgrade_without_user_id(self, app, client) -> None:
        resp = client.post("/api/polka/webhooks", json={"event": "user.upgraded"}, headers=_key(app))
        assert resp.status_code == 422

    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "ApiKey wrong"}, {"Authorization": "Bearer test-polka-key"}],
    )
    def test_bad_api_key(self, client, headers) -> None:
        resp = client.post("/api/polka/webhooks", json=_upgrade(str(uuid.uuid4())), headers=headers)
        assert resp.status_code == 401


def test_key_check_is_off_when_no_key_configured(tmp_path) -> None:
    app = create_app("testing", POLKA_KEY="", FILESERVER_ROOT=str(tmp_path))
    client = app.test_client()
    resp = client.post("/api/polka/webhooks", json={"event": "user.created"})
    assert resp.status_code == 204
