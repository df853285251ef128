"""
Seed the global meal catalog from a JSON export.

The file is a list of records shaped like
{"idMeal", "strMeal", "strCategory", "strMealThumb", "ingredients", "measures"}.
It is SAFE to run multiple times: nothing happens once any global meal exists.

Usage:
    python -m scripts.seed_meals
    python -m scripts.seed_meals --path data/meals.json
"""

import argparse
import asyncio
import json
import os
import sys

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.core.config import settings
from fastfood.models.meal import Meal


def _clean_list(values):
    if not isinstance(values, list):
        return []
    return [str(v).strip() for v in values if v and str(v).strip()]


def meal_from_record(record: dict) -> Meal:
    source_id = record.get("idMeal")
    return Meal(
        source_id=str(source_id) if source_id is not None else None,
        name=(record.get("strMeal") or "").strip(),
        category=(record.get("strCategory") or "").strip(),
        thumbnail_url=(record.get("strMealThumb") or "").strip(),
        ingredients=_clean_list(record.get("ingredients")),
        measures=_clean_list(record.get("measures")),
        is_global=True,
        created_by_seller_id=None,
    )


async def seed_meals(session: AsyncSession, path: str) -> int:
    """Insert every usable record; returns how many meals were created."""
    result = await session.execute(select(func.count(Meal.id)).where(Meal.is_global.is_(True)))
    if result.scalar_one() > 0:
        print("⚠️  Meals already seeded, skipping.")
        return 0

    if not os.path.exists(path):
        print(f"⚠️  Meals JSON not found at {path}, skipping seed.")
        return 0

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        print("⚠️  Meals JSON is not an array, skipping seed.")
        return 0

    meals = [meal_from_record(r) for r in data if isinstance(r, dict)]
    meals = [m for m in meals if m.name and m.category and m.thumbnail_url]
    session.add_all(meals)
    await session.commit()

    print(f"✅ Meals seed completed ({len(meals)} meals).")
    return len(meals)


async def main(path: str):
    from fastfood.db import async_session

    async with async_session() as session:
        await seed_meals(session, path)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the global meal catalog")
    parser.add_argument("--path", type=str, default=settings.meals_seed_path, help="Path to the meals JSON file")
    args = parser.parse_args()

    asyncio.run(main(args.path))
