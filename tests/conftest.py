"""Test fixtures.

Every test gets a fresh in-memory SQLite database. Requests go through the
real FastAPI app via httpx, with ``get_db`` pointed at the test engine and
real Bearer tokens minted by ``issue_token``.
"""
import os

# Must be set before fastfood.core.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import uuid
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fastfood.auth.dependencies import issue_token
from fastfood.db import get_db
from fastfood.main import app
from fastfood.models import Base, Meal, PaymentMethod, Restaurant, User


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------- Factories ----------

@pytest.fixture
def auth():
    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(user.id, user.role)}"}
    return _headers


@pytest.fixture
def make_user(db):
    async def _make(role: str = "customer", payment_method: Optional[PaymentMethod] = PaymentMethod.CASH, **fields: Any) -> User:
        user = User(
            role=role,
            email=fields.pop("email", f"{uuid.uuid4().hex[:10]}@example.com"),
            first_name=fields.pop("first_name", "Test"),
            last_name=fields.pop("last_name", role.capitalize()),
            payment_method=payment_method,
            **fields,
        )
        db.add(user)
        await db.commit()
        return user
    return _make


@pytest.fixture
def make_meal(db):
    async def _make(
        name: str = "Burger",
        category: str = "Beef",
        ingredients: Optional[List[str]] = None,
        seller: Optional[User] = None,
    ) -> Meal:
        meal = Meal(
            name=name,
            category=category,
            thumbnail_url=f"https://img.example.com/{name.lower().replace(' ', '-')}.jpg",
            ingredients=ingredients if ingredients is not None else ["Beef", "Bun"],
            measures=[],
            is_global=seller is None,
            created_by_seller_id=seller.id if seller else None,
        )
        db.add(meal)
        await db.commit()
        return meal
    return _make


@pytest.fixture
def make_restaurant(db):
    async def _make(seller: User, name: str = "Corner Grill", city: str = "Athens", address: str = "1 Main St") -> Restaurant:
        restaurant = Restaurant(seller_id=seller.id, name=name, city=city, address=address, menu_revision=0)
        db.add(restaurant)
        await db.commit()
        return restaurant
    return _make


@pytest.fixture
def set_menu(client, auth):
    """PUT the seller's menu; entries are (meal, price) or (meal, price, is_available)"""
    async def _set(seller: User, entries):
        items = []
        for entry in entries:
            meal, price = entry[0], entry[1]
            available = entry[2] if len(entry) > 2 else True
            items.append({"mealId": meal.id, "price": price, "isAvailable": available})
        resp = await client.put("/restaurants/mine/menu", json={"items": items}, headers=auth(seller))
        assert resp.status_code == 200, resp.text
        return resp.json()
    return _set


@pytest.fixture
def place_order(client, auth):
    async def _place(customer: User, restaurant: Restaurant, lines, fulfillment: str = "pickup"):
        body = {
            "restaurantId": restaurant.id,
            "fulfillment": fulfillment,
            "items": [{"mealId": meal.id, "quantity": qty} for meal, qty in lines],
        }
        return await client.post("/orders", json=body, headers=auth(customer))
    return _place


@pytest_asyncio.fixture
async def shop(make_user, make_meal, make_restaurant, set_menu):
    """A seller with a restaurant serving two priced meals, plus a paying customer"""
    seller = await make_user(role="seller", payment_method=None)
    customer = await make_user(role="customer")
    restaurant = await make_restaurant(seller)
    burger = await make_meal("Burger", "Beef", ["Beef", "Bun", "Cheese"])
    salad = await make_meal("Greek Salad", "Vegetarian", ["Tomato", "Feta", "Olive"])
    await set_menu(seller, [(burger, 5.00), (salad, 6.50)])

    return SimpleNamespace(
        seller=seller, customer=customer, restaurant=restaurant, burger=burger, salad=salad,
    )
