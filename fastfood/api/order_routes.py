from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal, get_current_customer, get_current_principal, get_current_seller
from fastfood.db import get_db
from fastfood.models.order import OrderStatus
from fastfood.schemas.order import OrderCreate, OrderEnvelope, OrderList, OrderListType, OrderRead, StatusUpdate
from fastfood.services import order_intake, order_state

router = APIRouter(prefix="/orders", tags=["orders"])


def _envelope(order) -> OrderEnvelope:
    return OrderEnvelope(order=OrderRead.model_validate(order))


def _list(orders) -> OrderList:
    return OrderList(orders=[OrderRead.model_validate(o) for o in orders])


@router.post("", response_model=OrderEnvelope, status_code=201)
async def create_order(
    body: OrderCreate,
    db: AsyncSession = Depends(get_db),
    customer: Principal = Depends(get_current_customer),
):
    """Place a pickup order"""
    order = await order_intake.create_order(db, customer.id, body)
    return _envelope(order)


@router.get("/mine", response_model=OrderList)
async def get_my_orders(
    type: Optional[OrderListType] = Query(None),
    db: AsyncSession = Depends(get_db),
    customer: Principal = Depends(get_current_customer),
):
    """My orders; ?type=active|past"""
    return _list(await order_state.my_orders(db, customer.id, type))


@router.get("/restaurant/mine", response_model=OrderList)
async def get_my_restaurant_orders(
    status: Optional[OrderStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Orders of my restaurant, optionally for one status"""
    return _list(await order_state.restaurant_orders(db, seller.id, status))


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order_by_id(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return _envelope(await order_state.get_visible_order(db, principal, order_id))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status(
    order_id: str,
    body: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Advance an order of my restaurant"""
    order = await order_state.update_status(db, seller.id, order_id, body.status)
    return _envelope(order)


@router.post("/{order_id}/confirm-delivered", response_model=OrderEnvelope)
async def confirm_delivered(
    order_id: str,
    customer: Principal = Depends(get_current_customer),
):
    """Disabled while delivery is not supported"""
    order_state.confirm_delivered(customer.id, order_id)
