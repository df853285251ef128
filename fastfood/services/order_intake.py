"""
Order Intake

Turns a cart into a durable, price-locked order. The restaurant row stays
locked from the menu read until the order is committed, so pricing, the
queue count behind the ready-time estimate and the insert form one unit
per restaurant.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.core.config import settings
from fastfood.core.errors import InvalidRequest, NotFound, PaymentMethodMissing
from fastfood.core.policy import delivery_fee_for, ensure_fulfillment_enabled
from fastfood.crud.meal import get_meals_by_ids
from fastfood.crud.order import count_queued_orders
from fastfood.crud.restaurant import get_price_index, get_restaurant
from fastfood.crud.user import get_user
from fastfood.models.order import Fulfillment, Order, OrderItem, OrderStatus
from fastfood.schemas.order import OrderCreate
from fastfood.utils.clock import minutes_from, utcnow
from fastfood.utils.money import MAX_AMOUNT, ZERO, to_cents

log = logging.getLogger(__name__)


def estimate_ready_at(queued_orders: int, now=None):
    """Every open order ahead, plus this one, costs one preparation slot."""
    wait_minutes = (queued_orders + 1) * settings.prep_minutes_per_order
    return minutes_from(now or utcnow(), wait_minutes)


async def create_order(db: AsyncSession, customer_id: str, order_in: OrderCreate) -> Order:
    # 1. Fulfillment mode
    ensure_fulfillment_enabled(order_in.fulfillment)
    if order_in.fulfillment == Fulfillment.DELIVERY and not (order_in.delivery_address or "").strip():
        raise InvalidRequest("deliveryAddress is required for delivery orders")

    # 2. Restaurant, locked until commit
    restaurant = await get_restaurant(db, order_in.restaurant_id, for_update=True)
    if not restaurant:
        raise NotFound("Restaurant not found")

    # 3. Price index: the menu is the only source of truth for pricing
    price_index = await get_price_index(db, restaurant.id)

    # 4. Payment profile
    user = await get_user(db, customer_id)
    payment_method = user.payment_method if user else None
    if not payment_method:
        raise PaymentMethodMissing()

    # 5. Lines must be on this restaurant's menu
    for line in order_in.items:
        if line.meal_id not in price_index:
            raise InvalidRequest(
                "One or more meals are not in the restaurant menu",
                mealId=line.meal_id,
            )

    # 6. Display names, one batch
    requested_ids = {line.meal_id for line in order_in.items}
    meals = await get_meals_by_ids(db, requested_ids)
    missing = sorted(requested_ids - set(meals))
    if missing:
        log.error("create_order menu references unknown meals: restaurant=%s meals=%s", restaurant.id, missing)
        raise NotFound("One or more meals were not found", missing=missing)

    # 7. Pricing snapshot
    subtotal = ZERO
    order_items = []
    for position, line in enumerate(order_in.items):
        price = price_index[line.meal_id]
        subtotal += price * line.quantity
        order_items.append(
            OrderItem(
                meal_id=line.meal_id,
                name_snapshot=meals[line.meal_id].name,
                price_snapshot=price,
                quantity=line.quantity,
                position=position,
            )
        )
    if subtotal > MAX_AMOUNT:
        raise InvalidRequest("Order total exceeds the maximum allowed amount", maxAmount=float(MAX_AMOUNT))
    subtotal = to_cents(subtotal)
    delivery_fee = delivery_fee_for(order_in.fulfillment, order_in.distance_km)
    total = subtotal + delivery_fee
    if total > MAX_AMOUNT:
        raise InvalidRequest("Order total exceeds the maximum allowed amount", maxAmount=float(MAX_AMOUNT))

    # 8. Queue-based ready time
    queued = await count_queued_orders(db, restaurant.id)
    estimated_ready_at = estimate_ready_at(queued)

    # 9. Persist
    order = Order(
        customer_id=customer_id,
        restaurant_id=restaurant.id,
        fulfillment=order_in.fulfillment,
        status=OrderStatus.ORDERED,
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=total,
        payment_method=getattr(payment_method, "value", payment_method),
        estimated_ready_at=estimated_ready_at,
        menu_revision=restaurant.menu_revision,
        items=order_items,
    )
    db.add(order)
    await db.commit()

    log.info(
        "create_order: order=%s restaurant=%s customer=%s total=%s queued=%s",
        order.id, restaurant.id, customer_id, total, queued,
    )
    return order
