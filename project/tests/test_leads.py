# tests/test_leads.py

from orderdesk.services.lead import parse_phone_numbers
from orderdesk.utils.timeutil import today_bst, tomorrow_bst


def test_parse_phone_numbers_splits_and_drops_short():
    text = "01711111111, 01722222222\n  123  \n\n+8801733333333,"
    assert parse_phone_numbers(text) == ["01711111111", "01722222222", "+8801733333333"]


def test_import_assigns_to_moderator_for_today(client, admin_headers, moderator):
    mod_id, headers = moderator
    resp = client.post(
        "/lead/import",
        json={
            "phone_numbers": "01711111111,01722222222\nshort",
            "customer_name": " Nasrin ",
            "address": "Mirpur 10",
            "moderator_id": mod_id,
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["count"] == 2
    lead = body["leads"][0]
    assert lead["status"] == "pending"
    assert lead["customer_name"] == "Nasrin"
    assert lead["assigned_date"] == today_bst().isoformat()
    assert lead["moderator_id"] == mod_id


def test_import_rejects_unknown_moderator_and_empty_list(client, admin_headers, moderator):
    mod_id, _ = moderator
    resp = client.post("/lead/import", json={"phone_numbers": "01711111111", "moderator_id": "m-missing"}, headers=admin_headers)
    assert resp.status_code == 404
    resp = client.post("/lead/import", json={"phone_numbers": "123, 456", "moderator_id": mod_id}, headers=admin_headers)
    assert resp.status_code == 400


def test_moderator_day_filters_and_stats(client, admin_headers, moderator):
    mod_id, headers = moderator
    client.post("/lead/import", json={"phone_numbers": "01711111111\n01722222222", "moderator_id": mod_id}, headers=admin_headers)
    client.post(
        "/lead/import",
        json={"phone_numbers": "01733333333", "moderator_id": mod_id, "assigned_date": tomorrow_bst().isoformat()},
        headers=admin_headers,
    )

    today = client.get("/lead/?day=today", headers=headers).json()
    tomorrow = client.get("/lead/?day=tomorrow", headers=headers).json()
    everything = client.get("/lead/?day=all", headers=headers).json()
    assert len(today) == 2
    assert len(tomorrow) == 1
    assert len(everything) == 3
    # по дате назначения, поздние сверху
    assert everything[0]["assigned_date"] == tomorrow_bst().isoformat()

    client.patch(f"/lead/{today[0]['id']}/status", json={"status": "no_response"}, headers=headers)
    stats = client.get("/lead/stats", headers=headers).json()
    assert stats == {"today": 1, "tomorrow": 1, "total": 3}

    assert client.get("/lead/?day=yesterday", headers=headers).status_code == 400


def test_moderators_only_see_and_update_their_leads(client, admin_headers, make_moderator):
    first_id, first_headers = make_moderator("First")
    second_id, second_headers = make_moderator("Second")
    client.post("/lead/import", json={"phone_numbers": "01711111111", "moderator_id": first_id}, headers=admin_headers)

    assert client.get("/lead/", headers=second_headers).json() == []
    lead_id = client.get("/lead/", headers=first_headers).json()[0]["id"]

    resp = client.patch(f"/lead/{lead_id}/status", json={"status": "confirmed"}, headers=second_headers)
    assert resp.status_code == 403
    resp = client.patch(f"/lead/{lead_id}/status", json={"status": "communication"}, headers=first_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "communication"


def test_reassign_range_resets_status(client, admin_headers, make_moderator):
    first_id, first_headers = make_moderator("First")
    second_id, second_headers = make_moderator("Second")
    client.post(
        "/lead/import",
        json={"phone_numbers": "01711111111\n01722222222\n01733333333", "moderator_id": first_id},
        headers=admin_headers,
    )
    admin_list = client.get("/lead/", headers=admin_headers).json()
    client.patch(f"/lead/{admin_list[0]['id']}/status", json={"status": "confirmed"}, headers=first_headers)

    target_date = tomorrow_bst().isoformat()
    resp = client.post(
        "/lead/reassign",
        json={"start": 1, "end": 2, "moderator_id": second_id, "assigned_date": target_date},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["count"] == 2
    moved = {l["id"] for l in resp.json()["leads"]}
    assert moved == {admin_list[0]["id"], admin_list[1]["id"]}

    second_leads = client.get("/lead/", headers=second_headers).json()
    assert len(second_leads) == 2
    assert all(l["status"] == "pending" and l["assigned_date"] == target_date for l in second_leads)
    assert len(client.get("/lead/", headers=first_headers).json()) == 1


def test_reassign_validates_range(client, admin_headers, moderator):
    mod_id, _ = moderator
    resp = client.post("/lead/reassign", json={"start": 3, "end": 2, "moderator_id": mod_id}, headers=admin_headers)
    assert resp.status_code == 400
    resp = client.post("/lead/reassign", json={"start": 0, "end": 2, "moderator_id": mod_id}, headers=admin_headers)
    assert resp.status_code == 422
    # позиции за концом списка пропускаются
    resp = client.post("/lead/reassign", json={"start": 5, "end": 9, "moderator_id": mod_id}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["count"] == 0


def test_lookup_autofills_from_lead(client, admin_headers, moderator):
    mod_id, headers = moderator
    client.post(
        "/lead/import",
        json={"phone_numbers": "+8801711111111", "customer_name": "Jamal", "address": "Uttara", "moderator_id": mod_id},
        headers=admin_headers,
    )
    resp = client.get("/lead/lookup", params={"phone": "01711111111"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["customer_name"] == "Jamal"
    assert resp.json()["address"] == "Uttara"

    assert client.get("/lead/lookup", params={"phone": "0171111"}, headers=headers).json() is None


def test_lookup_uses_newest_lead_only(client, admin_headers, moderator):
    mod_id, headers = moderator
    client.post(
        "/lead/import",
        json={"phone_numbers": "01711111111", "customer_name": "Old", "address": "Banani", "moderator_id": mod_id},
        headers=admin_headers,
    )
    client.post("/lead/import", json={"phone_numbers": "01711111111", "moderator_id": mod_id}, headers=admin_headers)

    resp = client.get("/lead/lookup", params={"phone": "01711111111"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() is None


def test_delete_lead_is_admin_only(client, admin_headers, moderator):
    mod_id, headers = moderator
    client.post("/lead/import", json={"phone_numbers": "01711111111", "moderator_id": mod_id}, headers=admin_headers)
    lead_id = client.get("/lead/", headers=admin_headers).json()[0]["id"]

    assert client.delete(f"/lead/{lead_id}", headers=headers).status_code == 403
    assert client.delete(f"/lead/{lead_id}", headers=admin_headers).status_code == 204
    assert client.get("/lead/", headers=admin_headers).json() == []
