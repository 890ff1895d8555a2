# tests/conftest.py

import os
import tempfile
from pathlib import Path

# Окружение должно быть готово до импорта orderdesk.config
TMP_DIR = Path(tempfile.mkdtemp(prefix="orderdesk-tests-"))
DB_PATH = TMP_DIR / "test.db"

os.environ.update({
    "AUTH_SECRET_KEY": "test-secret",
    "AUTH_LOGIN": "admin@example.com",
    "AUTH_PASSWORD": "admin-pass",
    "AUTH_HASH_ROUNDS": "1000",
    "DATABASE_URL": f"sqlite+aiosqlite:///{DB_PATH}",
    "LOG_DIR": str(TMP_DIR / "log"),
    "LOG_PRINT": "0",
    "LOG_PRINT_DB": "0",
    "COURIER_BASE_URL": "https://courier.test/api/v1",
})

import pytest
from fastapi.testclient import TestClient

from orderdesk.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"


def login(client, email, password):
    resp = client.post("/auth/token", data={"username": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def client():
    # Чистая база на каждый тест: файл пересоздаётся в lifespan
    if DB_PATH.exists():
        DB_PATH.unlink()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def make_moderator(client, admin_headers):
    """Создаёт модератора и возвращает (id, headers)."""
    counter = {"n": 0}

    def _make(name="Rahim", password="mod-pass"):
        counter["n"] += 1
        email = f"mod{counter['n']}@example.com"
        resp = client.post(
            "/moderator/",
            json={"name": name, "email": email, "password": password},
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"], login(client, email, password)

    return _make


@pytest.fixture
def moderator(make_moderator):
    return make_moderator()


@pytest.fixture
def make_order(client):
    def _make(headers, **overrides):
        payload = {
            "customer_name": "Karim Uddin",
            "customer_phone": "01711000000",
            "customer_address": "House 1, Road 2, Dhanmondi",
            "items": [{"product_id": "p1", "quantity": 2}],
            "notes": "Call before delivery",
        }
        payload.update(overrides)
        resp = client.post("/order/", json=payload, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
