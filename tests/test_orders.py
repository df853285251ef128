from datetime import datetime, timedelta

from fastfood.utils.clock import utcnow


def _eta(body):
    return datetime.fromisoformat(body["order"]["estimatedReadyAt"])


async def test_order_is_priced_from_menu_and_queued(client, shop, place_order):
    # two open orders ahead of ours
    for _ in range(2):
        resp = await place_order(shop.customer, shop.restaurant, [(shop.salad, 1)])
        assert resp.status_code == 201

    before = utcnow()
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 2)])
    after = utcnow()

    assert resp.status_code == 201, resp.text
    order = resp.json()["order"]
    assert order["status"] == "ordered"
    assert order["fulfillment"] == "pickup"
    assert order["customerId"] == shop.customer.id
    assert order["restaurantId"] == shop.restaurant.id
    assert order["subtotal"] == 10.0
    assert order["deliveryFee"] == 0.0
    assert order["total"] == 10.0
    assert order["paymentMethod"] == "cash"
    assert order["menuRevision"] == 1
    assert order["items"] == [
        {"mealId": shop.burger.id, "nameSnapshot": "Burger", "priceSnapshot": 5.0, "quantity": 2}
    ]

    eta = _eta(resp.json())
    assert before + timedelta(minutes=30) <= eta <= after + timedelta(minutes=30)


async def test_first_order_waits_one_slot(client, shop, place_order):
    before = utcnow()
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])
    after = utcnow()
    eta = _eta(resp.json())
    assert before + timedelta(minutes=10) <= eta <= after + timedelta(minutes=10)


async def test_delivered_orders_leave_the_queue(client, shop, place_order, auth):
    first = (await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])).json()["order"]
    for status in ("preparing", "delivered"):
        resp = await client.put(
            f"/orders/{first['id']}/status", json={"status": status}, headers=auth(shop.seller)
        )
        assert resp.status_code == 200

    before = utcnow()
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])
    after = utcnow()
    eta = _eta(resp.json())
    assert before + timedelta(minutes=10) <= eta <= after + timedelta(minutes=10)


async def test_price_snapshot_survives_menu_changes(client, shop, place_order, set_menu, auth):
    placed = (await place_order(shop.customer, shop.restaurant, [(shop.burger, 1), (shop.salad, 2)])).json()
    assert placed["order"]["total"] == 18.0

    await set_menu(shop.seller, [(shop.burger, 8.25)])

    resp = await client.get(f"/orders/{placed['order']['id']}", headers=auth(shop.customer))
    assert resp.status_code == 200
    order = resp.json()["order"]
    assert [(i["nameSnapshot"], i["priceSnapshot"], i["quantity"]) for i in order["items"]] == [
        ("Burger", 5.0, 1),
        ("Greek Salad", 6.5, 2),
    ]
    assert order["subtotal"] == 18.0
    assert order["menuRevision"] == 1

    repriced = (await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])).json()["order"]
    assert repriced["total"] == 8.25
    assert repriced["menuRevision"] == 2


async def test_duplicate_lines_are_kept_separate(client, shop, place_order):
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1), (shop.burger, 2)])
    assert resp.status_code == 201
    order = resp.json()["order"]
    assert [i["quantity"] for i in order["items"]] == [1, 2]
    assert order["subtotal"] == 15.0


async def test_delivery_is_rejected(client, shop, place_order):
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)], fulfillment="delivery")
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "INVALID_REQUEST"
    assert body["detail"] == "Delivery is currently disabled. Only pickup orders are allowed."


async def test_missing_payment_method_is_rejected(client, shop, make_user, place_order):
    customer = await make_user(role="customer", payment_method=None)
    resp = await place_order(customer, shop.restaurant, [(shop.burger, 1)])
    assert resp.status_code == 400
    assert resp.json()["code"] == "PAYMENT_METHOD_MISSING"


async def test_meal_not_on_menu_is_rejected(client, shop, make_meal, place_order):
    pizza = await make_meal("Pizza", "Vegetarian", ["Dough", "Tomato"])
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1), (pizza, 1)])
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "One or more meals are not in the restaurant menu"
    assert body["mealId"] == pizza.id


async def test_unavailable_meal_cannot_be_ordered(client, shop, set_menu, place_order):
    await set_menu(shop.seller, [(shop.burger, 5, False), (shop.salad, 6.5)])
    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])
    assert resp.status_code == 400
    assert resp.json()["mealId"] == shop.burger.id


async def test_unknown_restaurant(client, shop, auth):
    resp = await client.post(
        "/orders",
        json={"restaurantId": "nope", "fulfillment": "pickup", "items": [{"mealId": shop.burger.id, "quantity": 1}]},
        headers=auth(shop.customer),
    )
    assert resp.status_code == 404


async def test_malformed_cart_is_rejected(client, shop, auth):
    base = {"restaurantId": shop.restaurant.id, "fulfillment": "pickup"}
    for items in ([], [{"mealId": shop.burger.id, "quantity": 0}], [{"quantity": 1}]):
        resp = await client.post("/orders", json={**base, "items": items}, headers=auth(shop.customer))
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_REQUEST"


async def test_failed_order_writes_nothing(client, shop, make_meal, place_order, auth):
    pizza = await make_meal("Pizza", "Vegetarian", ["Dough"])
    await place_order(shop.customer, shop.restaurant, [(pizza, 1)])

    resp = await client.get("/orders/mine", headers=auth(shop.customer))
    assert resp.json()["orders"] == []


async def test_only_customers_place_orders(client, shop, place_order):
    resp = await place_order(shop.seller, shop.restaurant, [(shop.burger, 1)])
    assert resp.status_code == 403


async def test_my_orders_active_and_past(client, shop, place_order, auth):
    done = (await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])).json()["order"]
    open_ = (await place_order(shop.customer, shop.restaurant, [(shop.salad, 1)])).json()["order"]
    for status in ("preparing", "delivered"):
        await client.put(f"/orders/{done['id']}/status", json={"status": status}, headers=auth(shop.seller))

    headers = auth(shop.customer)
    everything = (await client.get("/orders/mine", headers=headers)).json()["orders"]
    active = (await client.get("/orders/mine", params={"type": "active"}, headers=headers)).json()["orders"]
    past = (await client.get("/orders/mine", params={"type": "past"}, headers=headers)).json()["orders"]

    assert {o["id"] for o in everything} == {done["id"], open_["id"]}
    assert [o["id"] for o in active] == [open_["id"]]
    assert [o["id"] for o in past] == [done["id"]]

    bad = await client.get("/orders/mine", params={"type": "someday"}, headers=headers)
    assert bad.status_code == 400


async def test_huge_quantity_is_rejected(client, shop, place_order, auth):
    for quantity in (10**28, 1001):
        resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, quantity)])
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_REQUEST"

    resp = await client.get("/orders/mine", headers=auth(shop.customer))
    assert resp.json()["orders"] == []


async def test_total_beyond_storable_amount_is_rejected(client, shop, set_menu, place_order, auth):
    await set_menu(shop.seller, [(shop.burger, "99999999.99")])

    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 2)])
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "INVALID_REQUEST"
    assert body["detail"] == "Order total exceeds the maximum allowed amount"

    resp = await place_order(shop.customer, shop.restaurant, [(shop.burger, 1)])
    assert resp.status_code == 201
    assert resp.json()["order"]["total"] == 99999999.99
