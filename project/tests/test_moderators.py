# tests/test_moderators.py


def test_create_moderator_lowercases_email(client, admin_headers):
    resp = client.post(
        "/moderator/",
        json={"name": " Salma ", "email": " Salma@Example.COM ", "password": "pw"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "salma@example.com"
    assert body["name"] == "Salma"
    assert body["role"] == "moderator"
    assert body["is_active"] is True

    dup = client.post(
        "/moderator/",
        json={"name": "Other", "email": "salma@example.com", "password": "pw"},
        headers=admin_headers,
    )
    assert dup.status_code == 409


def test_roster_call_stats(client, admin_headers, moderator):
    mod_id, headers = moderator
    client.post(
        "/lead/import",
        json={"phone_numbers": "01711111111\n01722222222\n01733333333", "moderator_id": mod_id},
        headers=admin_headers,
    )
    leads = client.get("/lead/", headers=headers).json()
    client.patch(f"/lead/{leads[0]['id']}/status", json={"status": "confirmed"}, headers=headers)

    roster = client.get("/moderator/", headers=admin_headers).json()
    assert len(roster) == 1
    stats = roster[0]
    assert stats["total_leads"] == 3
    assert stats["completed_leads"] == 1
    assert stats["completion_rate"] == 33
    assert stats["order_count"] == 0


def test_delete_unreferenced_moderator(client, admin_headers, moderator):
    mod_id, _ = moderator
    assert client.delete(f"/moderator/{mod_id}", headers=admin_headers).status_code == 204
    assert client.get("/moderator/", headers=admin_headers).json() == []


def test_referenced_moderator_is_only_deactivated(client, admin_headers, moderator, make_order):
    mod_id, headers = moderator
    make_order(headers)

    assert client.delete(f"/moderator/{mod_id}", headers=admin_headers).status_code == 409

    resp = client.patch(f"/moderator/{mod_id}/active", json={"is_active": False}, headers=admin_headers)
    assert resp.status_code == 200
    assert client.get("/moderator/", headers=admin_headers).json()[0]["is_active"] is False


def test_admin_is_not_a_moderator(client, admin_headers):
    assert client.delete("/moderator/admin-root", headers=admin_headers).status_code == 404
