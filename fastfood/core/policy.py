"""
Feature policy.

Delivery exists in the data model (fulfillment mode and the ``delivering``
status) but is switched off. Every "not supported" rejection goes through
this module so turning delivery on is a single change here.
"""
from decimal import Decimal

from fastfood.core.config import settings
from fastfood.core.errors import InvalidRequest
from fastfood.models.order import Fulfillment, OrderStatus
from fastfood.utils.money import ZERO, to_cents

DELIVERY_DISABLED_MESSAGE = "Delivery is currently disabled. Only pickup orders are allowed."

ENABLED_FULFILLMENT = frozenset({Fulfillment.PICKUP})


def delivery_enabled() -> bool:
    return Fulfillment.DELIVERY in ENABLED_FULFILLMENT


def ensure_fulfillment_enabled(fulfillment: Fulfillment) -> None:
    if fulfillment not in ENABLED_FULFILLMENT:
        raise InvalidRequest(DELIVERY_DISABLED_MESSAGE, fulfillment=fulfillment.value)


def ensure_status_enabled(status: OrderStatus) -> None:
    if status == OrderStatus.DELIVERING and not delivery_enabled():
        raise InvalidRequest("Delivery is currently disabled.")


def ensure_customer_confirmation_enabled() -> None:
    """Customer-side "confirm delivered" only exists for delivery orders."""
    if not delivery_enabled():
        raise InvalidRequest("Delivery is currently disabled.")


def calculate_delivery_fee(distance_km) -> Decimal:
    """max(base + distance * per_km, min_fee), rounded to cents."""
    base = Decimal(str(settings.delivery_base_fee))
    per_km = Decimal(str(settings.delivery_cost_per_km))
    min_fee = Decimal(str(settings.delivery_min_fee))
    raw = base + Decimal(str(distance_km or 0)) * per_km
    return to_cents(max(raw, min_fee))


def delivery_fee_for(fulfillment: Fulfillment, distance_km=None) -> Decimal:
    if fulfillment != Fulfillment.DELIVERY or not delivery_enabled():
        return ZERO
    return calculate_delivery_fee(distance_km)
