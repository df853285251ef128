import pytest

from fastfood.models.user import User

CARD = {"method": "card", "cardBrand": "Visa", "cardLast4": "4242", "holderName": "Ada Lovelace"}


async def test_me(client, make_user, auth):
    user = await make_user(role="customer", first_name="Ada", last_name="Lovelace")
    resp = await client.get("/users/me", headers=auth(user))
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == user.id
    assert body["role"] == "customer"
    assert body["firstName"] == "Ada"
    assert body["payment"]["method"] == "cash"
    assert set(body) == {"id", "role", "email", "firstName", "lastName", "payment"}


def test_user_table_holds_only_served_fields():
    assert set(User.__table__.columns.keys()) == {
        "id", "role", "email", "first_name", "last_name",
        "payment_method", "card_brand", "card_last4", "holder_name",
        "created_at", "updated_at",
    }


async def test_me_requires_token(client):
    resp = await client.get("/users/me")
    assert resp.status_code == 401
    assert resp.json()["code"] == "UNAUTHORIZED"

    resp = await client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_set_card_payment(client, make_user, auth):
    user = await make_user(role="customer", payment_method=None)
    resp = await client.put("/users/me/payment", json=CARD, headers=auth(user))
    assert resp.status_code == 200
    assert resp.json()["payment"] == CARD


async def test_cash_clears_card_fields(client, make_user, auth):
    user = await make_user(role="customer", payment_method=None)
    await client.put("/users/me/payment", json=CARD, headers=auth(user))

    resp = await client.put("/users/me/payment", json={**CARD, "method": "cash"}, headers=auth(user))
    assert resp.status_code == 200
    assert resp.json()["payment"] == {"method": "cash", "cardBrand": None, "cardLast4": None, "holderName": None}


@pytest.mark.parametrize(
    "body",
    [
        {"method": "card"},
        {**CARD, "cardLast4": "42a2"},
        {**CARD, "cardLast4": "424242"},
        {**CARD, "cardLast4": "\u0661\u0662\u0663\u0664"},
        {**CARD, "method": "prepaid", "holderName": " "},
        {**CARD, "method": "cheque"},
    ],
)
async def test_invalid_payment_profiles(client, make_user, auth, body):
    user = await make_user(role="customer", payment_method=None)
    resp = await client.put("/users/me/payment", json=body, headers=auth(user))
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


async def test_payment_profile_unlocks_ordering(client, shop, make_user, place_order, auth):
    customer = await make_user(role="customer", payment_method=None)
    assert (await place_order(customer, shop.restaurant, [(shop.burger, 1)])).status_code == 400

    await client.put("/users/me/payment", json=CARD, headers=auth(customer))
    resp = await place_order(customer, shop.restaurant, [(shop.burger, 1)])
    assert resp.status_code == 201
    assert resp.json()["order"]["paymentMethod"] == "card"
