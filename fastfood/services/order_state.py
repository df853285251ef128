"""
Order State Machine

Pickup orders move along ordered -> preparing -> delivered. Only the seller
owning the order's restaurant may advance an order; customers read their own.
"""
from typing import Optional, Tuple
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal
from fastfood.core.errors import Forbidden, InvalidTransition, NotFound
from fastfood.core.policy import ensure_customer_confirmation_enabled, ensure_status_enabled
from fastfood.crud.order import get_order, list_customer_orders, list_restaurant_orders
from fastfood.crud.restaurant import get_restaurant, get_restaurant_by_seller
from fastfood.models.order import Order, OrderStatus
from fastfood.schemas.order import OrderListType

log = logging.getLogger(__name__)

TRANSITIONS = {
    OrderStatus.ORDERED: (OrderStatus.PREPARING,),
    OrderStatus.PREPARING: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),
}


def allowed_next(status: OrderStatus) -> Tuple[OrderStatus, ...]:
    return TRANSITIONS.get(status, ())


async def update_status(db: AsyncSession, seller_id: str, order_id: str, next_status: OrderStatus) -> Order:
    ensure_status_enabled(next_status)

    order = await get_order(db, order_id, for_update=True)
    if not order:
        raise NotFound("Order not found")

    restaurant = await get_restaurant(db, order.restaurant_id) if order.restaurant_id else None
    if not restaurant:
        raise NotFound("Restaurant not found")

    if restaurant.seller_id != seller_id:
        log.warning("update_status forbidden: order=%s seller=%s", order.id, seller_id)
        raise Forbidden("Forbidden")

    current = OrderStatus(order.status)
    if next_status not in allowed_next(current):
        raise InvalidTransition(
            f"Invalid status transition from {current.value} to {next_status.value}",
            **{"from": current.value, "to": next_status.value},
        )

    order.status = next_status
    await db.commit()
    log.info("update_status: order=%s %s -> %s", order.id, current.value, next_status.value)
    return order


async def get_visible_order(db: AsyncSession, principal: Principal, order_id: str) -> Order:
    """The ordering customer and the owning seller may read an order"""
    order = await get_order(db, order_id)
    if not order:
        raise NotFound("Order not found")

    if principal.role == "customer" and order.customer_id == principal.id:
        return order

    if principal.role == "seller" and order.restaurant_id:
        restaurant = await get_restaurant(db, order.restaurant_id)
        if restaurant and restaurant.seller_id == principal.id:
            return order

    raise Forbidden("Forbidden")


async def my_orders(db: AsyncSession, customer_id: str, list_type: Optional[OrderListType] = None):
    if list_type == OrderListType.active:
        return await list_customer_orders(db, customer_id, delivered=False)
    if list_type == OrderListType.past:
        return await list_customer_orders(db, customer_id, delivered=True)
    return await list_customer_orders(db, customer_id)


async def restaurant_orders(db: AsyncSession, seller_id: str, status: Optional[OrderStatus] = None):
    restaurant = await get_restaurant_by_seller(db, seller_id)
    if not restaurant:
        raise NotFound("Restaurant not found")
    return await list_restaurant_orders(db, restaurant.id, status)


def confirm_delivered(customer_id: str, order_id: str) -> None:
    """Customer-side delivery confirmation; rejected while delivery is off"""
    log.info("confirm_delivered requested: order=%s customer=%s", order_id, customer_id)
    ensure_customer_confirmation_enabled()
