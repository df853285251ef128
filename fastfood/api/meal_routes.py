from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal, get_current_seller
from fastfood.core.errors import NotFound
from fastfood.crud import meal as meal_crud
from fastfood.db import get_db
from fastfood.schemas.meal import MealCreate, MealRead, MealUpdate

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("", response_model=List[MealRead])
async def get_meals(
    name: Optional[str] = None,
    category: Optional[str] = None,
    ingredient: Optional[str] = Query(None, description="Comma-separated, all must be present"),
    db: AsyncSession = Depends(get_db),
):
    """Search the catalog"""
    return await meal_crud.list_meals(db, name, category, ingredient)


@router.get("/mine/custom", response_model=List[MealRead])
async def get_my_custom_meals(
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    return await meal_crud.list_custom_meals(db, seller.id)


@router.get("/selectable", response_model=List[MealRead])
async def get_selectable_meals(
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Meals I may put on my menu: global ones plus my own"""
    return await meal_crud.list_selectable_meals(db, seller.id)


@router.get("/{meal_id}", response_model=MealRead)
async def get_meal_by_id(meal_id: str, db: AsyncSession = Depends(get_db)):
    meal = await meal_crud.get_meal(db, meal_id)
    if not meal:
        raise NotFound("Meal not found")
    return meal


@router.post("", response_model=MealRead, status_code=201)
async def create_custom_meal(
    body: MealCreate,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Create a seller-owned custom meal"""
    return await meal_crud.create_custom_meal(db, seller.id, body)


@router.put("/{meal_id}", response_model=MealRead)
async def update_custom_meal(
    meal_id: str,
    body: MealUpdate,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    meal = await meal_crud.update_custom_meal(db, meal_id, seller.id, body)
    if not meal:
        raise NotFound("Meal not found")
    return meal


@router.delete("/{meal_id}", status_code=204)
async def delete_custom_meal(
    meal_id: str,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Delete my custom meal and drop it from my menu"""
    meal = await meal_crud.delete_custom_meal(db, meal_id, seller.id)
    if not meal:
        raise NotFound("Meal not found")
    return Response(status_code=204)
