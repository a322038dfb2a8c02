import datetime
from typing import Any

import pytest

from prepper.models import MarkedRecipe, PeriodType, PlanningPreferences, Recipe
from prepper.storage import MemoryStorage, get_item, set_item
from prepper.stores import (
    MARKED_RECIPES_KEY,
    PLAN_KEY,
    MarkedRecipesStore,
    PlanStore,
    PreferencesStore,
    Writable,
    create_stores,
)


PLAN = {
    "weekStart": "2026-10-19",
    "days": [{"day": "Monday", "recipe": {"id": "52772", "title": "Teriyaki"}}],
}


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


def test_writable_notifies_in_order() -> None:
    store = Writable(1)
    seen: list[tuple[str, int]] = []
    store.subscribe(lambda v: seen.append(("a", v)))
    store.subscribe(lambda v: seen.append(("b", v)))
    store.set(2)
    assert seen == [("a", 1), ("b", 1), ("a", 2), ("b", 2)]


def test_unsubscribe() -> None:
    store = Writable(0)
    seen: list[int] = []
    unsubscribe = store.subscribe(seen.append)
    store.update(lambda v: v + 1)
    unsubscribe()
    unsubscribe()
    store.set(10)
    assert seen == [0, 1]
    assert store.value == 10


def test_plan_starts_empty(storage: MemoryStorage) -> None:
    assert PlanStore(storage).value is None


def test_plan_round_trip(storage: MemoryStorage) -> None:
    PlanStore(storage).set(PLAN)
    assert PlanStore(storage).value == PLAN
    assert get_item(storage, PLAN_KEY) == PLAN


def test_plan_update(storage: MemoryStorage) -> None:
    store = PlanStore(storage)
    store.set({"days": []})
    store.update(lambda plan: {**plan, "days": ["Monday"]})
    assert store.value == {"days": ["Monday"]}
    assert PlanStore(storage).value == {"days": ["Monday"]}


def test_plan_clear(storage: MemoryStorage) -> None:
    store = PlanStore(storage)
    seen: list[Any] = []
    store.subscribe(seen.append)
    store.set(PLAN)
    store.clear()
    assert seen == [None, PLAN, None]
    assert storage.get_item(PLAN_KEY) is None
    assert PlanStore(storage).value is None


def test_plan_corrupt_storage_gives_default() -> None:
    storage = MemoryStorage({PLAN_KEY: "{{"})
    assert PlanStore(storage).value is None


def test_marked_starts_empty(storage: MemoryStorage) -> None:
    assert MarkedRecipesStore(storage).value == []


def test_marked_wrong_type_ignored(storage: MemoryStorage) -> None:
    set_item(storage, MARKED_RECIPES_KEY, {"id": "1"})
    assert MarkedRecipesStore(storage).value == []


def test_toggle_adds_projection(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    recipe = Recipe(id="1", title="Soup", image="soup.jpg", calories=500)
    store.toggle(recipe)
    assert store.value == [{"id": "1", "title": "Soup", "image": "soup.jpg"}]
    assert store.is_marked("1")
    assert get_item(storage, MARKED_RECIPES_KEY) == store.value


def test_toggle_twice_restores(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    store.toggle({"id": "1", "title": "Soup", "image": "soup.jpg"})
    store.toggle({"id": "2", "title": "Stew", "image": "stew.jpg"})
    before = list(store.value)

    store.toggle({"id": "3", "title": "Pie", "image": "pie.jpg"})
    store.toggle({"id": "3"})

    assert store.value == before
    assert MarkedRecipesStore(storage).value == before


def test_toggle_keeps_insertion_order(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    for id in ("3", "1", "2"):
        store.toggle({"id": id, "title": id, "image": ""})
    store.toggle({"id": "1"})
    assert [r.id for r in store.recipes] == ["3", "2"]
    assert all(isinstance(r, MarkedRecipe) for r in store.recipes)


def test_toggle_notifies(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    seen: list[int] = []
    store.subscribe(lambda v: seen.append(len(v)))
    store.toggle({"id": "1"})
    store.toggle({"id": "1"})
    assert seen == [0, 1, 0]


def test_marked_clear(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    store.toggle({"id": "1"})
    store.clear()
    assert store.value == []
    assert storage.get_item(MARKED_RECIPES_KEY) is None
    assert MarkedRecipesStore(storage).value == []


def test_stores_do_not_share_keys(storage: MemoryStorage) -> None:
    stores = create_stores(storage)
    stores.plan.set(PLAN)
    stores.marked_recipes.toggle({"id": "1"})
    stores.plan.clear()
    assert create_stores(storage).marked_recipes.is_marked("1")


def test_preferences_defaults() -> None:
    prefs = PreferencesStore().value
    assert prefs.period_type is PeriodType.week
    assert prefs.selected_days == []
    assert prefs.week_start is None
    assert prefs.fridge_contents == ""
    assert prefs.current_step == 1


def test_preferences_steps_clamped() -> None:
    store = PreferencesStore()
    store.previous_step()
    assert store.value.current_step == 1
    for _ in range(5):
        store.next_step()
    assert store.value.current_step == 3
    store.previous_step()
    assert store.value.current_step == 2


def test_preferences_days() -> None:
    store = PreferencesStore()
    store.toggle_day("Friday")
    store.toggle_day("Monday")
    store.toggle_day("Wednesday")
    store.toggle_day("Friday")
    assert store.value.period_type is PeriodType.days
    assert store.value.selected_days == ["Monday", "Wednesday"]

    with pytest.raises(ValueError):
        store.toggle_day("Caturday")

    store.select_period(PeriodType.week)
    assert store.value.selected_days == []


def test_preferences_reset_and_not_persisted(storage: MemoryStorage) -> None:
    stores = create_stores(storage)
    stores.preferences.set_week_start(datetime.date(2026, 10, 19))
    stores.preferences.set_fridge_contents("eggs, spinach")
    stores.preferences.next_step()
    assert stores.preferences.value.to_dict() == {
        "periodType": "week",
        "selectedDays": [],
        "weekStart": "2026-10-19",
        "fridgeContents": "eggs, spinach",
        "currentStep": 2,
    }
    assert storage.items == {}

    stores.preferences.reset()
    assert stores.preferences.value.current_step == 1
    assert stores.preferences.value.fridge_contents == ""


def test_planning_preferences_step_range() -> None:
    with pytest.raises(ValueError):
        PlanningPreferences(current_step=4)


def test_marked_clear_gives_fresh_list(storage: MemoryStorage) -> None:
    store = MarkedRecipesStore(storage)
    store.clear()
    store.value.append({"id": "stray"})
    store.clear()
    assert store.value == []
    assert MarkedRecipesStore(storage).value == []
