from decimal import Decimal
from enum import Enum
from typing import List, Optional
from datetime import datetime

from pydantic import Field

from fastfood.core.constants import MAX_LINE_QUANTITY
from fastfood.models.order import Fulfillment, OrderStatus
from fastfood.schemas.common import CamelModel, Money, NonEmptyStr
from fastfood.utils.money import MAX_AMOUNT


class OrderListType(str, Enum):
    active = "active"
    past = "past"


# ---------- Requests ----------
class OrderLineIn(CamelModel):
    meal_id: NonEmptyStr
    quantity: int = Field(ge=1, le=MAX_LINE_QUANTITY)


class OrderCreate(CamelModel):
    restaurant_id: NonEmptyStr
    items: List[OrderLineIn] = Field(min_length=1)
    fulfillment: Fulfillment
    # Only meaningful for delivery, which the policy currently rejects
    delivery_address: Optional[str] = None
    distance_km: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)


class StatusUpdate(CamelModel):
    status: OrderStatus


# ---------- Responses ----------
class OrderItemRead(CamelModel):
    meal_id: str
    name_snapshot: str
    price_snapshot: Money
    quantity: int


class OrderRead(CamelModel):
    id: str
    customer_id: str
    restaurant_id: Optional[str] = None
    items: List[OrderItemRead]
    fulfillment: Fulfillment
    status: OrderStatus
    subtotal: Money
    delivery_fee: Money
    total: Money
    payment_method: str
    estimated_ready_at: Optional[datetime] = None
    menu_revision: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderEnvelope(CamelModel):
    order: OrderRead


class OrderList(CamelModel):
    orders: List[OrderRead]
