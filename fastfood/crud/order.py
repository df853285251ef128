from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.core.constants import QUEUED_ORDER_STATUSES
from fastfood.models.order import Order, OrderStatus


async def get_order(db: AsyncSession, order_id: str, for_update: bool = False) -> Optional[Order]:
    query = select(Order).where(Order.id == order_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def count_queued_orders(db: AsyncSession, restaurant_id: str) -> int:
    """Orders of this restaurant still waiting for or in preparation"""
    result = await db.execute(
        select(func.count(Order.id)).where(
            Order.restaurant_id == restaurant_id,
            Order.status.in_(QUEUED_ORDER_STATUSES),
        )
    )
    return int(result.scalar_one())


async def list_customer_orders(db: AsyncSession, customer_id: str, delivered: Optional[bool] = None):
    """``delivered``: True -> past orders, False -> active orders, None -> all"""
    query = select(Order).where(Order.customer_id == customer_id)
    if delivered is True:
        query = query.where(Order.status == OrderStatus.DELIVERED)
    elif delivered is False:
        query = query.where(Order.status != OrderStatus.DELIVERED)
    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()


async def list_restaurant_orders(db: AsyncSession, restaurant_id: str, status: Optional[OrderStatus] = None):
    query = select(Order).where(Order.restaurant_id == restaurant_id)
    if status is not None:
        query = query.where(Order.status == status)
    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()
