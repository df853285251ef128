from typing import Dict, List

from fastfood.schemas.common import CamelModel


class StatsRestaurant(CamelModel):
    id: str
    name: str


class TopMeal(CamelModel):
    meal_id: str
    name: str
    total_quantity: int
    total_revenue: float


class RestaurantStats(CamelModel):
    restaurant: StatsRestaurant
    total_orders: int
    revenue_total: float
    avg_order_value: float
    orders_by_status: Dict[str, int]
    top_meals: List[TopMeal]
