# tests/test_dashboard.py

from types import SimpleNamespace

from orderdesk.services.dashboard import confirmation_rate


def test_confirmation_rate_rounds_and_handles_empty():
    orders = [SimpleNamespace(status=s) for s in ("confirmed", "delivered", "pending")]
    assert confirmation_rate(orders) == 67
    assert confirmation_rate([]) == 0


def test_admin_dashboard(client, admin_headers, moderator, make_order):
    mod_id, headers = moderator
    a = make_order(headers)                                             # 1180
    b = make_order(headers, items=[{"product_id": "p5", "quantity": 1}])  # 370
    make_order(headers)
    client.patch(f"/order/{a['id']}/status", json={"status": "delivered"}, headers=admin_headers)
    client.patch(f"/order/{b['id']}/status", json={"status": "cancelled"}, headers=admin_headers)
    client.post("/lead/import", json={"phone_numbers": "01711111111", "moderator_id": mod_id}, headers=admin_headers)

    body = client.get("/dashboard/", headers=admin_headers).json()
    assert body["role"] == "admin"
    assert body["total_orders"] == 3
    assert body["delivered"] == 1
    assert body["cancelled"] == 1
    assert body["pending"] == 1
    assert body["confirmation_rate"] == 33
    assert body["financials"] == {
        "total_revenue": 2730.0,
        "confirmed_value": 0.0,
        "delivered_value": 1180.0,
        "cancelled_value": 370.0,
    }
    assert body["total_leads"] == 1
    assert body["lead_stats"] is None
    assert [s["value"] for s in body["status_breakdown"]] == [1, 0, 0, 0, 1, 1, 0, 0]


def test_moderator_dashboard_is_scoped(client, admin_headers, make_moderator, make_order):
    first_id, first_headers = make_moderator("First")
    _, second_headers = make_moderator("Second")
    make_order(first_headers)
    make_order(second_headers)
    client.post("/lead/import", json={"phone_numbers": "01711111111\n01722222222", "moderator_id": first_id}, headers=admin_headers)

    body = client.get("/dashboard/", headers=first_headers).json()
    assert body["role"] == "moderator"
    assert body["total_orders"] == 1
    assert body["financials"] is None
    assert body["lead_stats"] == {"today": 2, "tomorrow": 0, "total": 2}


def test_dashboard_counts_every_order_status(client, admin_headers, moderator, make_order):
    _, headers = moderator
    shipped = make_order(headers)
    returned = make_order(headers)
    client.patch(f"/order/{shipped['id']}/status", json={"status": "shipped"}, headers=admin_headers)
    client.patch(f"/order/{returned['id']}/status", json={"status": "returned"}, headers=admin_headers)

    body = client.get("/dashboard/", headers=admin_headers).json()
    assert body["total_orders"] == 2
    assert body["counts"]["shipped"] == 1
    assert body["counts"]["returned"] == 1
    assert sum(body["counts"].values()) == body["total_orders"]
    assert sum(s["value"] for s in body["status_breakdown"]) == body["total_orders"]
    assert {s["status"]: s["name"] for s in body["status_breakdown"]}["on_hold"] == "On Hold"
