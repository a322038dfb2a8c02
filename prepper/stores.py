"""Observable client state.

A `Writable` holds a value and tells its observers whenever it changes. A
`PersistentStore` additionally writes every change through to one key of a
`Storage`, and reads that key back when it is created. The in-memory value
is what observers see; storage only has to survive a restart.

Build the stores once with `create_stores` and hand the `Stores` around.
"""
import copy
import datetime
import logging
from typing import Any, Callable, Mapping

from prepper import storage as kv
from prepper.dates import DAY_NAMES
from prepper.models import MarkedRecipe, PeriodType, PlanningPreferences, Recipe
from prepper.storage import MemoryStorage, Storage


logger = logging.getLogger(__name__)


PLAN_KEY = "prepper_plan"
MARKED_RECIPES_KEY = "marked_recipes"


type Unsubscribe = Callable[[], None]


class Writable[V]:
    def __init__(self, value: V) -> None:
        self._value = value
        self._observers: list[Callable[[V], None]] = []

    @property
    def value(self) -> V:
        return self._value

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self._value)

    def subscribe(self, observer: Callable[[V], None]) -> Unsubscribe:
        self._observers.append(observer)
        observer(self._value)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def set(self, value: V) -> None:
        self._value = value
        self._notify()

    def update(self, fn: Callable[[V], V]) -> None:
        self.set(fn(self._value))


class PersistentStore[V](Writable[V]):
    def __init__(self, storage: Storage, key: str, default: V) -> None:
        self.storage = storage
        self.key = key
        self.default = default
        super().__init__(self.load())

    def is_valid(self, value: Any) -> bool:
        return value is not None

    def load(self) -> V:
        saved = kv.get_item(self.storage, self.key)
        if saved is None:
            return copy.deepcopy(self.default)
        if not self.is_valid(saved):
            logger.warning('Ignoring stored value for "%s" of type %s', self.key, type(saved))
            return copy.deepcopy(self.default)
        return saved

    def set(self, value: V) -> None:
        self._value = value
        kv.set_item(self.storage, self.key, value)
        self._notify()

    def clear(self) -> None:
        self._value = copy.deepcopy(self.default)
        kv.remove_item(self.storage, self.key)
        self._notify()


class PlanStore(PersistentStore[Any]):
    """The saved meal plan. Its shape is up to the planner, `None` until saved."""

    def __init__(self, storage: Storage, key: str = PLAN_KEY) -> None:
        super().__init__(storage, key, None)


class MarkedRecipesStore(PersistentStore[list[dict[str, str]]]):
    def __init__(self, storage: Storage, key: str = MARKED_RECIPES_KEY) -> None:
        super().__init__(storage, key, [])

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, list)

    @property
    def recipes(self) -> list[MarkedRecipe]:
        return [
            MarkedRecipe.from_recipe(r)
            for r in self.value
            if isinstance(r, Mapping) and "id" in r
        ]

    def is_marked(self, recipe_id: str) -> bool:
        return any(isinstance(r, Mapping) and r.get("id") == recipe_id for r in self.value)

    def toggle(self, recipe: Recipe | Mapping[str, Any]) -> None:
        marked = MarkedRecipe.from_recipe(recipe)

        def toggled(recipes: list[dict[str, str]]) -> list[dict[str, str]]:
            if self.is_marked(marked.id):
                return [r for r in recipes if r.get("id") != marked.id]
            return [*recipes, marked.to_dict()]

        self.update(toggled)


class PreferencesStore(Writable[PlanningPreferences]):
    """Plan wizard state. Held in memory only."""

    def __init__(self, value: PlanningPreferences | None = None) -> None:
        super().__init__(PlanningPreferences() if value is None else value)

    def reset(self) -> None:
        self.set(PlanningPreferences())

    def next_step(self) -> None:
        step = min(self.value.current_step + 1, PlanningPreferences.last_step)
        self.set(self.value.replace(current_step=step))

    def previous_step(self) -> None:
        step = max(self.value.current_step - 1, PlanningPreferences.first_step)
        self.set(self.value.replace(current_step=step))

    def select_period(self, period_type: PeriodType) -> None:
        selected = self.value.selected_days if period_type is PeriodType.days else []
        self.set(self.value.replace(period_type=period_type, selected_days=selected))

    def toggle_day(self, day: str) -> None:
        if day not in DAY_NAMES:
            raise ValueError(f"Unknown day: {day}")
        days = set(self.value.selected_days) ^ {day}
        # keep the week's order, whatever order they were clicked in
        ordered = [d for d in DAY_NAMES if d in days]
        self.set(self.value.replace(period_type=PeriodType.days, selected_days=ordered))

    def set_week_start(self, week_start: datetime.date | None) -> None:
        self.set(self.value.replace(week_start=week_start))

    def set_fridge_contents(self, contents: str) -> None:
        self.set(self.value.replace(fridge_contents=contents))


class Stores:
    def __init__(
        self,
        *,
        plan: PlanStore,
        marked_recipes: MarkedRecipesStore,
        preferences: PreferencesStore,
    ) -> None:
        self.plan = plan
        self.marked_recipes = marked_recipes
        self.preferences = preferences


def create_stores(storage: Storage | None = None) -> Stores:
    storage = MemoryStorage() if storage is None else storage
    return Stores(
        plan=PlanStore(storage),
        marked_recipes=MarkedRecipesStore(storage),
        preferences=PreferencesStore(),
    )
