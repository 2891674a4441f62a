from datetime import date

import pytest

from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.infra.Recipe_Repository import RecipeRepository
from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.planning.picker import RecipePicker
from mealmate.logic.planning.week_view import WeekPlanner, week_range
from mealmate.utilities.dateutils import add_days, get_next_monday, week_dates


def _planner(api, notifier=None):
    return WeekPlanner(PlanRepository(api), SuggestionClient(api), RecipeRepository(api), notifier)


def test_week_range():
    assert week_range(0, date(2024, 6, 12)) == ("2024-06-17", "2024-06-23")
    assert week_range(-1, date(2024, 6, 12)) == ("2024-06-10", "2024-06-16")
    assert week_range(2, date(2024, 6, 12)) == ("2024-07-01", "2024-07-07")


@pytest.mark.asyncio
async def test_load_reads_week_and_recipe_count(api, backend):
    planner = _planner(api)
    start = get_next_monday()
    backend.set_plan(start, recipe_id="r1", is_confirmed=True)
    backend.set_plan(add_days(start, 7), label="TBD")

    plans = await planner.load()
    assert [p.date for p in plans] == [start]
    assert plans[0].recipe.title == "Spaghetti Bolognese"
    assert planner.recipe_count == 8
    assert planner.can_plan()
    assert not planner.all_days_planned()

    plans = await planner.load(offset=1)
    assert [p.title_or_label() for p in plans] == ["TBD"]


@pytest.mark.asyncio
async def test_constraints_step_starts_on_week_shown(api):
    planner = _planner(api)
    planner.offset = 1
    assert planner.constraints_step().start_date == add_days(get_next_monday(), 7)


@pytest.mark.asyncio
async def test_suggest_meal_fills_one_day(api, backend):
    planner = _planner(api)
    await planner.load()
    day = add_days(planner.start_date, 2)

    plan = await planner.suggest_meal(day)
    assert plan.recipe_id == "r1"
    assert [p.date for p in planner.plans] == [day]
    assert backend.plans[day]["isConfirmed"] is False
    assert backend.requests["alternative"][0]["excludeRecipeIds"] == []


@pytest.mark.asyncio
async def test_nothing_to_suggest_without_recipes(backend, storage):
    backend.recipes = []
    async with backend.client(storage) as api:
        planner = _planner(api)
        await planner.load()
        assert not planner.can_plan()
        assert await planner.suggest_meal(planner.start_date) is None


@pytest.mark.asyncio
async def test_pick_manually_all_creates_empty_week(api, backend):
    planner = _planner(api)
    plans = await planner.pick_manually_all()
    assert [p.date for p in plans] == week_dates(planner.start_date)
    assert all(not p.is_planned() for p in plans)
    assert all(body == {"label": "", "isConfirmed": False} for body in backend.requests["update_plan"])


@pytest.mark.asyncio
async def test_all_days_planned(api, backend):
    planner = _planner(api)
    for i, d in enumerate(week_dates(planner.start_date)):
        if i == 3:
            backend.set_plan(d, label="Eating Out")
        else:
            backend.set_plan(d, recipe_id="r2")
    await planner.load()
    assert planner.all_days_planned()


@pytest.mark.asyncio
async def test_picker_labels_and_failures(api, backend, notifier, alerts):
    picker = RecipePicker("2024-06-11", RecipeRepository(api), PlanRepository(api), notifier)
    out = await picker.mark_eating_out()
    assert out.label == "Eating Out"
    tbd = await picker.mark_tbd()
    assert tbd.title_or_label() == "TBD"

    backend.fail.add("update_plan")
    assert await picker.mark_tbd() is None
    assert alerts[-1][1].message == "Failed to mark as TBD. Please try again."


@pytest.mark.asyncio
async def test_picker_search(api):
    picker = RecipePicker("2024-06-11", RecipeRepository(api), PlanRepository(api))
    await picker.load()
    assert [r.title for r in picker.filter("italian")] == [
        "Spaghetti Bolognese", "Mushroom Risotto", "Margherita Pizza"]
    assert len(picker.filter()) == 8
