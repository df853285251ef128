import json

from sqlalchemy import func
from sqlalchemy.future import select

from fastfood.models.meal import Meal
from scripts.seed_meals import meal_from_record, seed_meals

RECORDS = [
    {
        "idMeal": 52772,
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strMealThumb": "https://img.example.com/teriyaki.jpg",
        "ingredients": ["soy sauce", "water", "", None, "brown sugar"],
        "measures": ["3/4 cup", "1/2 cup", "", "1/4 cup"],
    },
    {
        "idMeal": "52960",
        "strMeal": "Salmon Avocado Salad",
        "strCategory": "Seafood",
        "strMealThumb": "https://img.example.com/salmon.jpg",
        "ingredients": ["Salmon", "Avocado"],
    },
    {"idMeal": "1", "strMeal": "", "strCategory": "Broken", "strMealThumb": "x"},
]


def test_meal_from_record():
    meal = meal_from_record(RECORDS[0])
    assert meal.source_id == "52772"
    assert meal.name == "Teriyaki Chicken Casserole"
    assert meal.ingredients == ["soy sauce", "water", "brown sugar"]
    assert meal.measures == ["3/4 cup", "1/2 cup", "1/4 cup"]
    assert meal.is_global is True
    assert meal.created_by_seller_id is None


async def test_seed_is_idempotent(db, tmp_path):
    path = tmp_path / "meals.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")

    assert await seed_meals(db, str(path)) == 2
    assert await seed_meals(db, str(path)) == 0

    result = await db.execute(select(func.count(Meal.id)))
    assert result.scalar_one() == 2


async def test_seed_skips_missing_or_malformed_file(db, tmp_path):
    assert await seed_meals(db, str(tmp_path / "absent.json")) == 0

    path = tmp_path / "meals.json"
    path.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
    assert await seed_meals(db, str(path)) == 0
