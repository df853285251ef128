from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal, get_current_seller
from fastfood.core.errors import NotFound
from fastfood.crud import restaurant as restaurant_crud
from fastfood.db import get_db
from fastfood.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from fastfood.schemas.stats import RestaurantStats
from fastfood.services.stats import restaurant_stats

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=List[RestaurantRead])
async def get_restaurants(
    city: Optional[str] = None,
    name: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await restaurant_crud.list_restaurants(db, city, name)


@router.post("", response_model=RestaurantRead, status_code=201)
async def create_restaurant(
    body: RestaurantCreate,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Create my restaurant (one per seller)"""
    return await restaurant_crud.create_restaurant(db, seller.id, body)


@router.get("/mine", response_model=Optional[RestaurantRead])
async def get_my_restaurant(
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    return await restaurant_crud.get_restaurant_by_seller(db, seller.id)


@router.put("/mine", response_model=RestaurantRead)
async def update_my_restaurant(
    body: RestaurantUpdate,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    restaurant = await restaurant_crud.get_restaurant_by_seller(db, seller.id)
    if not restaurant:
        raise NotFound("Restaurant not found")
    return await restaurant_crud.update_restaurant(db, restaurant, body)


@router.delete("/mine", status_code=204)
async def delete_my_restaurant(
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Delete my restaurant; refused while orders are still open"""
    restaurant = await restaurant_crud.delete_restaurant(db, seller.id)
    if not restaurant:
        raise NotFound("Restaurant not found")
    return Response(status_code=204)


@router.get("/mine/stats", response_model=RestaurantStats)
async def get_my_restaurant_stats(
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    return await restaurant_stats(db, seller.id)


@router.get("/{restaurant_id}", response_model=RestaurantRead)
async def get_restaurant_by_id(restaurant_id: str, db: AsyncSession = Depends(get_db)):
    restaurant = await restaurant_crud.get_restaurant(db, restaurant_id)
    if not restaurant:
        raise NotFound("Restaurant not found")
    return restaurant
