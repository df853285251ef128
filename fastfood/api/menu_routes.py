from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal, get_current_seller
from fastfood.db import get_db
from fastfood.schemas.menu import MenuFilters, MenuItemRead, MenuRead, MenuReplace
from fastfood.services import menu_projection
from fastfood.utils.money import MAX_AMOUNT

router = APIRouter(prefix="/restaurants", tags=["menu"])


def menu_filters(
    name: Optional[str] = None,
    category: Optional[str] = None,
    ingredient: Optional[str] = Query(None, description="Comma-separated, all must be present"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0, le=MAX_AMOUNT),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0, le=MAX_AMOUNT),
) -> MenuFilters:
    return MenuFilters(
        name=name,
        category=category,
        ingredient=ingredient,
        min_price=min_price,
        max_price=max_price,
    )


# "mine" routes first so they don't get captured by /{restaurant_id}

@router.put("/mine/menu", response_model=List[MenuItemRead])
async def set_my_menu(
    body: MenuReplace,
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """Replace my restaurant's whole menu"""
    return await menu_projection.replace_menu(db, seller.id, body.items)


@router.get("/mine/menu", response_model=MenuRead)
async def get_my_menu(
    filters: MenuFilters = Depends(menu_filters),
    db: AsyncSession = Depends(get_db),
    seller: Principal = Depends(get_current_seller),
):
    """My menu, unavailable entries included"""
    return await menu_projection.read_own_menu(db, seller.id, filters)


@router.get("/{restaurant_id}/menu", response_model=MenuRead)
async def get_restaurant_menu(
    restaurant_id: str,
    filters: MenuFilters = Depends(menu_filters),
    db: AsyncSession = Depends(get_db),
):
    """Public menu: available entries only"""
    return await menu_projection.read_public_menu(db, restaurant_id, filters)
