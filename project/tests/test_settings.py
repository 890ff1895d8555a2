# tests/test_settings.py

import pytest


def test_default_settings(client, admin_headers):
    body = client.get("/settings/", headers=admin_headers).json()
    assert body["logo_url"] is None
    assert body["courier_config"]["api_key"] == ""
    assert body["courier_config"]["base_url"] == "https://courier.test/api/v1"


def test_update_courier_config_and_logo(client, admin_headers):
    config = {
        "api_key": "k",
        "secret_key": "s",
        "base_url": "https://portal.steadfast.com.bd/api/v1",
        "account_email": "ops@example.com",
    }
    resp = client.put("/settings/courier", json=config, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["courier_config"]["api_key"] == "k"

    resp = client.put("/settings/logo", json={"logo_url": "https://cdn.example.com/logo.png"}, headers=admin_headers)
    assert resp.json()["logo_url"] == "https://cdn.example.com/logo.png"
    assert resp.json()["courier_config"]["secret_key"] == "s"

    resp = client.put("/settings/logo", json={"logo_url": None}, headers=admin_headers)
    assert resp.json()["logo_url"] is None


def test_read_settings_failure_is_logged(client, admin_headers, monkeypatch):
    from orderdesk.routes import setting as setting_routes

    logged = []

    async def broken(request):
        raise RuntimeError("db down")

    async def record(target="", message="", data=None, is_console=True):
        logged.append((target, message))

    monkeypatch.setattr(setting_routes, "read_settings_service", broken)
    monkeypatch.setattr(client.app.state.log, "log_error", record)

    with pytest.raises(RuntimeError):
        client.get("/settings/", headers=admin_headers)
    assert logged == [("settings", "Ошибка чтения настроек: db down")]
