from typing import Any

import pytest


def make_meal(**overrides: Any) -> dict[str, Any]:
    meal: dict[str, Any] = {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": (
            "STEP 1\r\n"
            "1. Preheat oven to 350 F.\r\n"
            "\r\n"
            "STEP 2\r\n"
            "2) Combine soy sauce, water and brown sugar in a saucepan.\n"
            "Serve hot."
        ),
    }
    for i in range(1, 21):
        meal[f"strIngredient{i}"] = ""
        meal[f"strMeasure{i}"] = ""
    meal.update(
        {
            "strIngredient1": "soy sauce",
            "strMeasure1": "3/4 cup",
            "strIngredient2": " water ",
            "strMeasure2": " 1/2 cup ",
            "strIngredient3": "brown sugar",
            "strMeasure3": None,
        }
    )
    meal.update(overrides)
    return meal


@pytest.fixture
def meal() -> dict[str, Any]:
    return make_meal()
