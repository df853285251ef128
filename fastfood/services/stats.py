"""
Restaurant stats

Read-only reporting over persisted orders. Figures come from the order
snapshots, never from the current menu or catalog.
"""
from sqlalchemy import func, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.core.constants import TOP_MEALS_LIMIT
from fastfood.core.errors import NotFound
from fastfood.crud.restaurant import get_restaurant_by_seller
from fastfood.models.order import Order, OrderItem, OrderStatus
from fastfood.schemas.stats import RestaurantStats, StatsRestaurant, TopMeal


async def restaurant_stats(db: AsyncSession, seller_id: str) -> RestaurantStats:
    restaurant = await get_restaurant_by_seller(db, seller_id)
    if not restaurant:
        raise NotFound("Restaurant not found")

    totals = await db.execute(
        select(func.count(Order.id), func.coalesce(func.sum(Order.total), 0))
        .where(Order.restaurant_id == restaurant.id)
    )
    total_orders, revenue_total = totals.one()
    total_orders = int(total_orders or 0)
    revenue_total = float(revenue_total or 0)
    avg_order_value = revenue_total / total_orders if total_orders else 0.0

    by_status = await db.execute(
        select(Order.status, func.count(Order.id))
        .where(Order.restaurant_id == restaurant.id)
        .group_by(Order.status)
    )
    orders_by_status = {status.value: 0 for status in OrderStatus}
    for status, count in by_status.all():
        orders_by_status[OrderStatus(status).value] = int(count)

    quantity_sum = func.sum(OrderItem.quantity).label("total_quantity")
    top = await db.execute(
        select(
            OrderItem.meal_id,
            func.max(OrderItem.name_snapshot),
            quantity_sum,
            func.sum(OrderItem.quantity * OrderItem.price_snapshot),
        )
        .join(Order, Order.id == OrderItem.order_id)
        .where(Order.restaurant_id == restaurant.id)
        .group_by(OrderItem.meal_id)
        .order_by(desc(quantity_sum))
        .limit(TOP_MEALS_LIMIT)
    )
    top_meals = [
        TopMeal(
            meal_id=meal_id,
            name=name,
            total_quantity=int(qty or 0),
            total_revenue=round(float(revenue or 0), 2),
        )
        for meal_id, name, qty, revenue in top.all()
    ]

    return RestaurantStats(
        restaurant=StatsRestaurant(id=restaurant.id, name=restaurant.name),
        total_orders=total_orders,
        revenue_total=round(revenue_total, 2),
        avg_order_value=round(avg_order_value, 2),
        orders_by_status=orders_by_status,
        top_meals=top_meals,
    )
