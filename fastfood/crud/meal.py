from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.models.meal import Meal
from fastfood.models.restaurant import Restaurant, RestaurantMenuItem
from fastfood.schemas.meal import MealCreate, MealUpdate


def _has_all_ingredients(meal: Meal, wanted: List[str]) -> bool:
    have = {str(x).strip().lower() for x in (meal.ingredients or [])}
    return all(w in have for w in wanted)


def parse_ingredient_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [s.strip().lower() for s in raw.split(",") if s.strip()]


async def list_meals(db: AsyncSession, name: str = None, category: str = None, ingredient: str = None):
    """Search the catalog; name/category are case-insensitive substrings"""
    query = select(Meal)
    if name:
        query = query.where(Meal.name.icontains(name, autoescape=True))
    if category:
        query = query.where(Meal.category.icontains(category, autoescape=True))
    query = query.order_by(Meal.name)

    result = await db.execute(query)
    meals = result.scalars().all()

    # JSON list column: ingredient matching happens in Python
    wanted = parse_ingredient_list(ingredient)
    if wanted:
        meals = [m for m in meals if _has_all_ingredients(m, wanted)]
    return meals


async def get_meal(db: AsyncSession, meal_id: str) -> Optional[Meal]:
    result = await db.execute(select(Meal).where(Meal.id == meal_id))
    return result.scalar_one_or_none()


async def get_meals_by_ids(db: AsyncSession, meal_ids: Iterable[str]) -> Dict[str, Meal]:
    """Batch lookup keyed by id; unknown ids are simply absent"""
    ids = list(set(meal_ids))
    if not ids:
        return {}
    result = await db.execute(select(Meal).where(Meal.id.in_(ids)))
    return {m.id: m for m in result.scalars().all()}


async def list_selectable_meals(db: AsyncSession, seller_id: str):
    """Global meals plus the seller's own custom meals"""
    result = await db.execute(
        select(Meal)
        .where(
            or_(
                Meal.is_global == True,
                and_(Meal.is_global == False, Meal.created_by_seller_id == seller_id),
            )
        )
        .order_by(Meal.name)
    )
    return result.scalars().all()


async def list_custom_meals(db: AsyncSession, seller_id: str):
    result = await db.execute(
        select(Meal)
        .where(Meal.is_global == False, Meal.created_by_seller_id == seller_id)
        .order_by(Meal.name)
    )
    return result.scalars().all()


async def get_custom_meal(db: AsyncSession, meal_id: str, seller_id: str) -> Optional[Meal]:
    result = await db.execute(
        select(Meal).where(
            Meal.id == meal_id,
            Meal.is_global == False,
            Meal.created_by_seller_id == seller_id,
        )
    )
    return result.scalar_one_or_none()


async def create_custom_meal(db: AsyncSession, seller_id: str, meal_in: MealCreate) -> Meal:
    meal = Meal(
        name=meal_in.name,
        category=meal_in.category,
        thumbnail_url=meal_in.thumbnail_url,
        ingredients=list(meal_in.ingredients),
        measures=list(meal_in.measures),
        is_global=False,
        created_by_seller_id=seller_id,
    )
    db.add(meal)
    await db.commit()
    return meal


async def update_custom_meal(db: AsyncSession, meal_id: str, seller_id: str, updates: MealUpdate):
    """Replace a custom meal's fields; None when the seller doesn't own it"""
    meal = await get_custom_meal(db, meal_id, seller_id)
    if not meal:
        return None

    meal.name = updates.name
    meal.category = updates.category
    meal.thumbnail_url = updates.thumbnail_url
    meal.ingredients = list(updates.ingredients)
    meal.measures = list(updates.measures)

    await db.commit()
    return meal


async def delete_custom_meal(db: AsyncSession, meal_id: str, seller_id: str):
    """Delete a custom meal and retract it from the seller's menu in one transaction"""
    meal = await get_custom_meal(db, meal_id, seller_id)
    if not meal:
        return None

    res = await db.execute(
        select(Restaurant).where(Restaurant.seller_id == seller_id).with_for_update()
    )
    restaurant = res.scalar_one_or_none()
    if restaurant:
        removed = await db.execute(
            delete(RestaurantMenuItem).where(
                RestaurantMenuItem.restaurant_id == restaurant.id,
                RestaurantMenuItem.meal_id == meal.id,
            )
        )
        if removed.rowcount:
            restaurant.menu_revision = (restaurant.menu_revision or 0) + 1

    await db.delete(meal)
    await db.commit()
    return meal
