async def test_stats_for_new_restaurant(client, shop, auth):
    resp = await client.get("/restaurants/mine/stats", headers=auth(shop.seller))
    assert resp.status_code == 200
    assert resp.json() == {
        "restaurant": {"id": shop.restaurant.id, "name": "Corner Grill"},
        "totalOrders": 0,
        "revenueTotal": 0.0,
        "avgOrderValue": 0.0,
        "ordersByStatus": {"ordered": 0, "preparing": 0, "delivering": 0, "delivered": 0},
        "topMeals": [],
    }


async def test_stats_come_from_order_snapshots(client, shop, place_order, set_menu, auth):
    first = (await place_order(shop.customer, shop.restaurant, [(shop.burger, 3)])).json()["order"]
    await place_order(shop.customer, shop.restaurant, [(shop.burger, 1), (shop.salad, 2)])
    await client.put(f"/orders/{first['id']}/status", json={"status": "preparing"}, headers=auth(shop.seller))

    # later price changes must not rewrite history
    await set_menu(shop.seller, [(shop.burger, 50)])

    stats = (await client.get("/restaurants/mine/stats", headers=auth(shop.seller))).json()
    assert stats["totalOrders"] == 2
    assert stats["revenueTotal"] == 33.0
    assert stats["avgOrderValue"] == 16.5
    assert stats["ordersByStatus"] == {"ordered": 1, "preparing": 1, "delivering": 0, "delivered": 0}
    assert stats["topMeals"] == [
        {"mealId": shop.burger.id, "name": "Burger", "totalQuantity": 4, "totalRevenue": 20.0},
        {"mealId": shop.salad.id, "name": "Greek Salad", "totalQuantity": 2, "totalRevenue": 13.0},
    ]


async def test_stats_require_restaurant(client, make_user, auth):
    seller = await make_user(role="seller", payment_method=None)
    assert (await client.get("/restaurants/mine/stats", headers=auth(seller))).status_code == 404
