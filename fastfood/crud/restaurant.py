from decimal import Decimal
from typing import Dict, List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.core.constants import OPEN_ORDER_STATUSES
from fastfood.core.errors import Conflict
from fastfood.models.order import Order
from fastfood.models.restaurant import Restaurant, RestaurantMenuItem
from fastfood.schemas.restaurant import RestaurantCreate, RestaurantUpdate

log = logging.getLogger(__name__)


async def get_restaurant(db: AsyncSession, restaurant_id: str, for_update: bool = False) -> Optional[Restaurant]:
    """Load a restaurant; ``for_update`` takes the per-restaurant row lock"""
    query = select(Restaurant).where(Restaurant.id == restaurant_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_restaurant_by_seller(db: AsyncSession, seller_id: str, for_update: bool = False) -> Optional[Restaurant]:
    query = select(Restaurant).where(Restaurant.seller_id == seller_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_restaurants(db: AsyncSession, city: str = None, name: str = None):
    query = select(Restaurant)
    if city:
        query = query.where(Restaurant.city.icontains(city, autoescape=True))
    if name:
        query = query.where(Restaurant.name.icontains(name, autoescape=True))
    result = await db.execute(query.order_by(Restaurant.name))
    return result.scalars().all()


async def create_restaurant(db: AsyncSession, seller_id: str, data: RestaurantCreate) -> Restaurant:
    existing = await get_restaurant_by_seller(db, seller_id)
    if existing:
        raise Conflict("Seller already has a restaurant")

    restaurant = Restaurant(
        seller_id=seller_id,
        name=data.name,
        phone=(data.phone or "").strip() or None,
        address=data.address,
        city=data.city,
        menu_revision=0,
    )
    db.add(restaurant)
    try:
        await db.commit()
    except IntegrityError:
        # Lost the race against a concurrent create for the same seller
        await db.rollback()
        log.info("create_restaurant duplicate: seller=%s", seller_id)
        raise Conflict("Seller already has a restaurant")

    log.info("create_restaurant: seller=%s restaurant=%s", seller_id, restaurant.id)
    return restaurant


async def update_restaurant(db: AsyncSession, restaurant: Restaurant, updates: RestaurantUpdate) -> Restaurant:
    update_data = updates.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if key != "phone" and value is None:
            continue
        setattr(restaurant, key, value)
    await db.commit()
    return restaurant


async def count_open_orders(db: AsyncSession, restaurant_id: str) -> int:
    result = await db.execute(
        select(func.count(Order.id)).where(
            Order.restaurant_id == restaurant_id,
            Order.status.in_(OPEN_ORDER_STATUSES),
        )
    )
    return int(result.scalar_one())


async def delete_restaurant(db: AsyncSession, seller_id: str):
    """Delete the seller's restaurant; refused while orders are still open"""
    restaurant = await get_restaurant_by_seller(db, seller_id, for_update=True)
    if not restaurant:
        return None

    open_orders = await count_open_orders(db, restaurant.id)
    if open_orders:
        raise Conflict(
            "Restaurant has orders that are not delivered yet",
            openOrders=open_orders,
        )

    await db.delete(restaurant)
    await db.commit()
    log.info("delete_restaurant: seller=%s restaurant=%s", seller_id, restaurant.id)
    return restaurant


# ---------- Menu entries ----------

async def list_menu_entries(db: AsyncSession, restaurant_id: str) -> List[RestaurantMenuItem]:
    """Menu entries in menu order, each with its live catalog meal loaded"""
    result = await db.execute(
        select(RestaurantMenuItem)
        .where(RestaurantMenuItem.restaurant_id == restaurant_id)
        .order_by(RestaurantMenuItem.position)
    )
    return result.scalars().all()


async def get_price_index(db: AsyncSession, restaurant_id: str) -> Dict[str, Decimal]:
    """mealId -> price for the orderable (available) entries of a menu"""
    result = await db.execute(
        select(RestaurantMenuItem.meal_id, RestaurantMenuItem.price).where(
            RestaurantMenuItem.restaurant_id == restaurant_id,
            RestaurantMenuItem.is_available == True,
        )
    )
    return {meal_id: Decimal(str(price)) for meal_id, price in result.all()}
