import datetime
from enum import Enum
from typing import Any, Mapping, Self


LABELS = ("estimated", "api")


class Ingredient:
    def __init__(self, name: str, amount: str = "") -> None:
        self.name = name
        self.amount = amount

    def __repr__(self) -> str:
        return f"<Ingredient(name={self.name}, amount={self.amount})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.amount) == (other.name, other.amount)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "amount": self.amount}


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        title: str,
        image: str = "",
        ingredients: list[Ingredient] | None = None,
        steps: list[str] | None = None,
        calories: int = 0,
        prep_minutes: int = 0,
        cook_minutes: int = 0,
        labels: list[str] | None = None,
        category: str = "",
        area: str = "",
    ) -> None:
        self.id = id
        self.title = title
        self.image = image
        self.ingredients = [] if ingredients is None else ingredients
        self.steps = [] if steps is None else steps
        self.calories = calories
        self.prep_minutes = prep_minutes
        self.cook_minutes = cook_minutes
        self.labels = list(LABELS) if labels is None else labels
        self.category = category
        self.area = area

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Read a recipe back from its wire shape. Missing or mistyped fields take defaults."""
        ingredients = [
            Ingredient(name=str(i.get("name") or ""), amount=str(i.get("amount") or ""))
            for i in _as_list(data.get("ingredients"))
            if isinstance(i, Mapping)
        ]
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            image=str(data.get("image") or ""),
            ingredients=ingredients,
            steps=[str(s) for s in _as_list(data.get("steps")) if s is not None],
            calories=_as_int(data.get("calories")),
            prep_minutes=_as_int(data.get("prepMinutes")),
            cook_minutes=_as_int(data.get("cookMinutes")),
            labels=[str(label) for label in _as_list(data.get("labels")) or LABELS],
            category=str(data.get("category") or ""),
            area=str(data.get("area") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "steps": list(self.steps),
            "calories": self.calories,
            "prepMinutes": self.prep_minutes,
            "cookMinutes": self.cook_minutes,
            "labels": list(self.labels),
            "category": self.category,
            "area": self.area,
        }


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class MarkedRecipe:
    """What is remembered about a recipe the user has marked."""

    def __init__(self, id: str, title: str = "", image: str = "") -> None:
        self.id = id
        self.title = title
        self.image = image

    def __repr__(self) -> str:
        return f"<MarkedRecipe(id={self.id}, title={self.title})>"

    @classmethod
    def from_recipe(cls, recipe: Recipe | Mapping[str, Any]) -> Self:
        if isinstance(recipe, Recipe):
            return cls(id=recipe.id, title=recipe.title, image=recipe.image)
        return cls(
            id=recipe["id"],
            title=recipe.get("title", ""),
            image=recipe.get("image", ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title, "image": self.image}


class DietPreferences:
    def __init__(
        self,
        *,
        vegetarian: bool = False,
        vegan: bool = False,
        gluten_free: bool = False,
        dairy_free: bool = False,
    ) -> None:
        self.vegetarian = vegetarian
        self.vegan = vegan
        self.gluten_free = gluten_free
        self.dairy_free = dairy_free

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        return cls(
            vegetarian=bool(data.get("vegetarian")),
            vegan=bool(data.get("vegan")),
            gluten_free=bool(data.get("glutenFree")),
            dairy_free=bool(data.get("dairyFree")),
        )

    @property
    def plant_based(self) -> bool:
        return self.vegetarian or self.vegan

    def describe(self) -> list[str]:
        flags = {
            "vegetarian": self.vegetarian,
            "vegan": self.vegan,
            "gluten-free": self.gluten_free,
            "dairy-free": self.dairy_free,
        }
        return [name for name, on in flags.items() if on]


class ChatContext:
    def __init__(
        self,
        *,
        recipe: Recipe | None = None,
        preferences: DietPreferences | None = None,
        avoid_ingredients: list[str] | None = None,
    ) -> None:
        self.recipe = recipe
        self.preferences = DietPreferences() if preferences is None else preferences
        self.avoid_ingredients = [] if avoid_ingredients is None else avoid_ingredients

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Self:
        if not data:
            return cls()
        recipe = data.get("recipe")
        preferences = data.get("preferences")
        avoid = _as_list(data.get("avoidIngredients"))
        return cls(
            recipe=Recipe.from_dict(recipe) if isinstance(recipe, Mapping) else None,
            preferences=(
                DietPreferences.from_dict(preferences)
                if isinstance(preferences, Mapping)
                else None
            ),
            avoid_ingredients=[
                str(a).strip() for a in avoid if a is not None and str(a).strip()
            ],
        )


class PeriodType(Enum):
    week = "week"
    days = "days"


class PlanningPreferences:
    """State of the three step plan wizard. Never persisted."""

    first_step = 1
    last_step = 3

    def __init__(
        self,
        *,
        period_type: PeriodType = PeriodType.week,
        selected_days: list[str] | None = None,
        week_start: datetime.date | None = None,
        fridge_contents: str = "",
        current_step: int = 1,
    ) -> None:
        if not self.first_step <= current_step <= self.last_step:
            raise ValueError(f"Step must be between 1 and 3, got {current_step}.")
        self.period_type = period_type
        self.selected_days = [] if selected_days is None else selected_days
        self.week_start = week_start
        self.fridge_contents = fridge_contents
        self.current_step = current_step

    def __repr__(self) -> str:
        return (
            f"<PlanningPreferences(period_type={self.period_type.value}, "
            f"current_step={self.current_step})>"
        )

    def replace(self, **changes: Any) -> "PlanningPreferences":
        values: dict[str, Any] = {
            "period_type": self.period_type,
            "selected_days": list(self.selected_days),
            "week_start": self.week_start,
            "fridge_contents": self.fridge_contents,
            "current_step": self.current_step,
        }
        values.update(changes)
        return PlanningPreferences(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "periodType": self.period_type.value,
            "selectedDays": list(self.selected_days),
            "weekStart": None if self.week_start is None else self.week_start.isoformat(),
            "fridgeContents": self.fridge_contents,
            "currentStep": self.current_step,
        }
