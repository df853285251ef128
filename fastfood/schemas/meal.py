from typing import Optional, List
from datetime import datetime

from fastfood.schemas.common import CamelModel, NonEmptyStr


# ---------- Meal ----------
class MealBase(CamelModel):
    name: NonEmptyStr
    category: NonEmptyStr
    thumbnail_url: NonEmptyStr
    ingredients: List[NonEmptyStr] = []
    measures: List[str] = []


class MealCreate(MealBase):
    pass


class MealUpdate(MealBase):
    # Full replacement: ingredients must be sent explicitly
    ingredients: List[NonEmptyStr]


class MealSummary(CamelModel):
    id: str
    name: str
    category: str
    thumbnail_url: str
    ingredients: List[str] = []


class MealRead(MealBase):
    id: str
    is_global: bool
    created_by_seller_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
