# tests/test_orders.py


def test_create_order_computes_totals_and_decrements_stock(client, admin_headers, moderator, make_order):
    mod_id, headers = moderator
    order = make_order(
        headers,
        items=[{"product_id": "p1", "quantity": 2}, {"product_id": "p5", "quantity": 1}],
        delivery_region="outside_dhaka",
    )

    assert order["id"].startswith("ORD-") and len(order["id"]) == 9
    assert order["moderator_id"] == mod_id
    assert order["status"] == "pending"
    assert order["subtotal"] == 550 * 2 + 290
    assert order["delivery_charge"] == 150
    assert order["total_amount"] == 550 * 2 + 290 + 150
    assert [it["price"] for it in order["items"]] == [550, 290]

    stock = {p["id"]: p["stock"] for p in client.get("/product/", headers=admin_headers).json()}
    assert stock["p1"] == 48
    assert stock["p5"] == 49


def test_inside_dhaka_is_default_region(client, moderator, make_order):
    _, headers = moderator
    order = make_order(headers)
    assert order["delivery_region"] == "inside_dhaka"
    assert order["total_amount"] == 550 * 2 + 80


def test_create_order_validation(client, moderator):
    _, headers = moderator
    base = {
        "customer_name": "Karim",
        "customer_phone": "01711000000",
        "customer_address": "Dhaka",
        "items": [{"product_id": "p1", "quantity": 1}],
    }

    assert client.post("/order/", json={**base, "items": []}, headers=headers).status_code == 400
    assert client.post("/order/", json={**base, "customer_phone": " 0171100 "}, headers=headers).status_code == 400
    assert client.post("/order/", json={**base, "customer_address": "  "}, headers=headers).status_code == 400
    assert client.post("/order/", json={**base, "items": [{"product_id": "nope", "quantity": 1}]}, headers=headers).status_code == 404
    assert client.post("/order/", json={**base, "items": [{"product_id": "p1", "quantity": 0}]}, headers=headers).status_code == 422


def test_stock_limit_counts_repeated_lines(client, moderator):
    _, headers = moderator
    resp = client.post(
        "/order/",
        json={
            "customer_name": "Karim",
            "customer_phone": "01711000000",
            "customer_address": "Dhaka",
            "items": [{"product_id": "p1", "quantity": 30}, {"product_id": "p1", "quantity": 30}],
        },
        headers=headers,
    )
    assert resp.status_code == 400
    assert "50" in resp.json()["detail"]


def test_moderators_see_only_their_orders(client, admin_headers, make_moderator, make_order):
    first_id, first_headers = make_moderator("First")
    _, second_headers = make_moderator("Second")
    order = make_order(first_headers)

    assert [o["id"] for o in client.get("/order/", headers=first_headers).json()] == [order["id"]]
    assert client.get("/order/", headers=second_headers).json() == []
    assert client.get(f"/order/{order['id']}", headers=second_headers).status_code == 404
    assert client.get(f"/order/{order['id']}", headers=first_headers).status_code == 200
    assert len(client.get("/order/", headers=admin_headers).json()) == 1


def test_search_and_status_filters(client, admin_headers, moderator, make_order):
    _, headers = moderator
    karim = make_order(headers, customer_name="Karim Uddin", customer_phone="01711000000")
    make_order(headers, customer_name="Fatema Begum", customer_phone="01899000000")

    by_name = client.get("/order/", params={"search": "FATEMA"}, headers=admin_headers).json()
    assert [o["customer_name"] for o in by_name] == ["Fatema Begum"]

    by_phone = client.get("/order/", params={"search": "017110"}, headers=admin_headers).json()
    assert [o["id"] for o in by_phone] == [karim["id"]]

    by_id = client.get("/order/", params={"search": karim["id"].lower()}, headers=admin_headers).json()
    assert [o["id"] for o in by_id] == [karim["id"]]

    client.patch(f"/order/{karim['id']}/status", json={"status": "delivered"}, headers=admin_headers)
    delivered = client.get("/order/", params={"status": "delivered"}, headers=admin_headers).json()
    assert [o["id"] for o in delivered] == [karim["id"]]
    assert len(client.get("/order/", params={"status": "all"}, headers=admin_headers).json()) == 2


def test_orders_are_listed_newest_first(client, admin_headers, moderator, make_order):
    _, headers = moderator
    first = make_order(headers)
    second = make_order(headers)
    ids = [o["id"] for o in client.get("/order/", headers=admin_headers).json()]
    assert ids == [second["id"], first["id"]]


def test_status_change_is_admin_only(client, admin_headers, moderator, make_order):
    _, headers = moderator
    order = make_order(headers)

    assert client.patch(f"/order/{order['id']}/status", json={"status": "confirmed"}, headers=headers).status_code == 403

    resp = client.patch(
        f"/order/{order['id']}/status",
        json={"status": "on_hold", "courier": {"consignment_id": "123", "courier_status": "in_review"}},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "on_hold"
    assert resp.json()["consignment_id"] == "123"

    bad = client.patch(f"/order/{order['id']}/status", json={"status": "lost"}, headers=admin_headers)
    assert bad.status_code == 422
