from typing import Optional
from datetime import datetime

from fastfood.schemas.common import CamelModel, NonEmptyStr


class RestaurantCreate(CamelModel):
    name: NonEmptyStr
    address: NonEmptyStr
    city: NonEmptyStr
    phone: Optional[str] = None


class RestaurantUpdate(CamelModel):
    name: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None
    city: Optional[NonEmptyStr] = None
    phone: Optional[str] = None


class RestaurantSummary(CamelModel):
    id: str
    name: str
    city: str
    address: str


class RestaurantRead(RestaurantSummary):
    seller_id: str
    phone: Optional[str] = None
    menu_revision: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
