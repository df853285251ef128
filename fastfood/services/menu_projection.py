"""
Menu Projection

A restaurant's menu is its priced, availability-flagged subset of the meal
catalog. Sellers replace it wholesale; the public reads only the available
part, joined live with the current catalog record.
"""
from decimal import Decimal
from typing import Dict, List
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.core.errors import Forbidden, NotFound
from fastfood.crud.meal import get_meals_by_ids, parse_ingredient_list
from fastfood.crud.restaurant import get_restaurant, get_restaurant_by_seller, list_menu_entries
from fastfood.models.restaurant import Restaurant, RestaurantMenuItem
from fastfood.schemas.meal import MealSummary
from fastfood.schemas.menu import MenuEntryRead, MenuFilters, MenuItemIn, MenuRead
from fastfood.schemas.restaurant import RestaurantSummary
from fastfood.utils.money import to_cents

log = logging.getLogger(__name__)


def collapse_duplicates(items: List[MenuItemIn]) -> Dict[str, MenuItemIn]:
    """Last occurrence of a mealId wins; it keeps the position of the first one."""
    normalized: Dict[str, MenuItemIn] = {}
    for item in items:
        normalized[item.meal_id] = item
    return normalized


async def replace_menu(db: AsyncSession, seller_id: str, items: List[MenuItemIn]) -> List[RestaurantMenuItem]:
    """
    Atomically replace the seller's whole menu.

    Every referenced meal must exist and be either global or owned by this
    seller. Nothing is written unless all entries pass.
    """
    normalized = collapse_duplicates(items)

    restaurant = await get_restaurant_by_seller(db, seller_id, for_update=True)
    if not restaurant:
        raise NotFound("Restaurant not found")

    if normalized:
        meals = await get_meals_by_ids(db, normalized.keys())

        missing = [meal_id for meal_id in normalized if meal_id not in meals]
        if missing:
            log.warning("replace_menu missing meals: seller=%s missing=%s", seller_id, missing)
            raise NotFound("Some meals were not found", missing=missing)

        not_allowed = [
            meal_id for meal_id in normalized
            if not meals[meal_id].is_global and meals[meal_id].created_by_seller_id != seller_id
        ]
        if not_allowed:
            log.warning("replace_menu foreign meals: seller=%s meals=%s", seller_id, not_allowed)
            raise Forbidden("Some meals are not allowed to be added", notAllowed=not_allowed)

    # Delete first so the (restaurant, meal) unique key is free for the new rows
    await db.execute(
        delete(RestaurantMenuItem).where(RestaurantMenuItem.restaurant_id == restaurant.id)
    )
    entries = [
        RestaurantMenuItem(
            restaurant_id=restaurant.id,
            meal_id=meal_id,
            price=to_cents(item.price),
            is_available=item.is_available,
            position=position,
        )
        for position, (meal_id, item) in enumerate(normalized.items())
    ]
    db.add_all(entries)
    restaurant.menu_revision = (restaurant.menu_revision or 0) + 1

    await db.commit()
    log.info(
        "replace_menu: restaurant=%s revision=%s entries=%s",
        restaurant.id, restaurant.menu_revision, len(entries),
    )
    return entries


def filter_menu(entries: List[RestaurantMenuItem], filters: MenuFilters, include_unavailable: bool) -> List[RestaurantMenuItem]:
    wanted_ingredients = parse_ingredient_list(filters.ingredient)
    name = (filters.name or "").strip().lower()
    category = (filters.category or "").strip().lower()

    kept = []
    for entry in entries:
        meal = entry.meal
        if meal is None:
            continue
        if not include_unavailable and not entry.is_available:
            continue

        price = Decimal(str(entry.price))
        if filters.min_price is not None and price < filters.min_price:
            continue
        if filters.max_price is not None and price > filters.max_price:
            continue

        if name and name not in (meal.name or "").lower():
            continue
        if category and category not in (meal.category or "").lower():
            continue
        if wanted_ingredients:
            have = {str(x).strip().lower() for x in (meal.ingredients or [])}
            if not all(ing in have for ing in wanted_ingredients):
                continue

        kept.append(entry)
    return kept


def _build_menu(restaurant: Restaurant, entries: List[RestaurantMenuItem]) -> MenuRead:
    return MenuRead(
        restaurant=RestaurantSummary.model_validate(restaurant),
        menu=[
            MenuEntryRead(
                meal=MealSummary.model_validate(entry.meal),
                price=entry.price,
                is_available=entry.is_available,
            )
            for entry in entries
        ],
    )


async def read_public_menu(db: AsyncSession, restaurant_id: str, filters: MenuFilters) -> MenuRead:
    restaurant = await get_restaurant(db, restaurant_id)
    if not restaurant:
        raise NotFound("Restaurant not found")

    entries = await list_menu_entries(db, restaurant.id)
    return _build_menu(restaurant, filter_menu(entries, filters, include_unavailable=False))


async def read_own_menu(db: AsyncSession, seller_id: str, filters: MenuFilters) -> MenuRead:
    """The seller's full menu, unavailable entries included so they can be re-enabled"""
    restaurant = await get_restaurant_by_seller(db, seller_id)
    if not restaurant:
        raise NotFound("Restaurant not found")

    entries = await list_menu_entries(db, restaurant.id)
    return _build_menu(restaurant, filter_menu(entries, filters, include_unavailable=True))
