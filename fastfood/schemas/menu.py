from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from fastfood.schemas.common import CamelModel, Money, NonEmptyStr
from fastfood.schemas.meal import MealSummary
from fastfood.schemas.restaurant import RestaurantSummary
from fastfood.utils.money import MAX_AMOUNT


class MenuItemIn(CamelModel):
    meal_id: NonEmptyStr
    price: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    is_available: bool = True


class MenuReplace(CamelModel):
    items: List[MenuItemIn]


class MenuItemRead(CamelModel):
    meal_id: str
    price: Money
    is_available: bool


class MenuEntryRead(CamelModel):
    """A menu entry joined with the live catalog record."""

    meal: MealSummary
    price: Money
    is_available: bool


class MenuRead(CamelModel):
    restaurant: RestaurantSummary
    menu: List[MenuEntryRead]


class MenuFilters(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    ingredient: Optional[str] = None  # comma-separated, all must be present
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
