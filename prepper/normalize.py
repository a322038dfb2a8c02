"""Turn TheMealDB meal records into `Recipe`s.

TheMealDB gives no timings or nutrition, so calories, prep and cook minutes
are estimates drawn at random on every call. The same meal normalized twice
will not carry the same numbers.
"""
import random
import re
from typing import Any, Iterable, Mapping

from prepper.models import LABELS, Ingredient, Recipe


MAX_INGREDIENTS = 20

CALORIES = (400, 400)
PREP_MINUTES = (15, 20)
COOK_MINUTES = (20, 40)

STEP_MARKER = re.compile(r"^STEP \d+$", re.IGNORECASE)
DOTTED_NUMBER = re.compile(r"^\d+\.\s*")
BRACKETED_NUMBER = re.compile(r"^\d+\)\s*")
LINE_BREAK = re.compile(r"\r?\n")


type Meal = Mapping[str, Any]


def _text(meal: Meal, key: str) -> str:
    value = meal.get(key)
    return value if isinstance(value, str) else ""


def _estimate(rng: random.Random, bounds: tuple[int, int]) -> int:
    low, span = bounds
    return low + rng.randrange(span)


def parse_ingredients(meal: Meal) -> list[Ingredient]:
    ingredients: list[Ingredient] = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = _text(meal, f"strIngredient{i}").strip()
        if not name:
            continue
        amount = _text(meal, f"strMeasure{i}").strip()
        ingredients.append(Ingredient(name=name, amount=amount))
    return ingredients


def parse_steps(instructions: str) -> list[str]:
    steps: list[str] = []
    for line in LINE_BREAK.split(instructions):
        line = line.strip()
        if not line or STEP_MARKER.match(line):
            continue
        line = BRACKETED_NUMBER.sub("", DOTTED_NUMBER.sub("", line, count=1), count=1)
        # "1." on its own line leaves nothing behind
        if line:
            steps.append(line)
    return steps


def normalize_recipe(meal: Meal | None, *, rng: random.Random | None = None) -> Recipe | None:
    if meal is None:
        return None
    rng = random.Random() if rng is None else rng

    return Recipe(
        id=str(meal.get("idMeal") or ""),
        title=_text(meal, "strMeal"),
        image=_text(meal, "strMealThumb"),
        ingredients=parse_ingredients(meal),
        steps=parse_steps(_text(meal, "strInstructions")),
        calories=_estimate(rng, CALORIES),
        prep_minutes=_estimate(rng, PREP_MINUTES),
        cook_minutes=_estimate(rng, COOK_MINUTES),
        labels=list(LABELS),
        category=_text(meal, "strCategory"),
        area=_text(meal, "strArea"),
    )


def normalize_recipes(
    meals: Iterable[Meal | None], *, rng: random.Random | None = None
) -> list[Recipe]:
    rng = random.Random() if rng is None else rng
    recipes = (normalize_recipe(meal, rng=rng) for meal in meals)
    return [r for r in recipes if r is not None]
