import pytest

from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.planning.constraints import (
    GENERATION_ERROR_MESSAGE,
    GENERATION_ERROR_TITLE,
    ConstraintsState,
    ConstraintsStep,
)
from mealmate.logic.planning.errors import WorkflowStateError
from mealmate.utilities.dateutils import parse_date

MONDAY = "2024-06-10"


def _step(api, notifier=None, **kwargs):
    return ConstraintsStep(SuggestionClient(api), notifier, start_date=MONDAY, **kwargs)


@pytest.mark.asyncio
async def test_defaults(api):
    step = ConstraintsStep(SuggestionClient(api))
    assert parse_date(step.start_date).weekday() == 0
    assert step.selected_days == [0, 1, 2, 3, 4, 5, 6]
    assert step.days_to_skip() == []
    assert step.avoid_repeats is True
    assert step.prefer_simple is False
    assert step.vegetarian_only is False
    assert step.state is ConstraintsState.EDITING
    assert step.can_generate


@pytest.mark.asyncio
async def test_toggle_day_moves_between_cooking_and_skipped(api):
    step = _step(api)
    step.toggle_day(6)
    step.toggle_day(2)
    assert step.selected_days == [0, 1, 3, 4, 5]
    assert step.days_to_skip() == [2, 6]

    step.toggle_day(6)
    assert step.selected_days == [0, 1, 3, 4, 5, 6]
    assert step.days_to_skip() == [2]


@pytest.mark.asyncio
async def test_three_dinner_days_skip_the_other_four(api, backend):
    step = _step(api)
    for day in (1, 3, 5, 6):
        step.toggle_day(day)
    assert step.selected_days == [0, 2, 4]
    assert step.days_to_skip() == [1, 3, 5, 6]

    result = await step.generate()
    assert backend.requests["generate"][0]["daysToSkip"] == [1, 3, 5, 6]
    assert [s.is_skipped for s in result.suggestions] == [False, True, False, True, False, True, True]
    assert [s.day_of_week for s in result.suggestions] == [0, 1, 2, 3, 4, 5, 6]


@pytest.mark.asyncio
async def test_toggle_day_rejects_out_of_range(api):
    step = _step(api)
    with pytest.raises(ValueError):
        step.toggle_day(7)
    with pytest.raises(ValueError):
        step.toggle_day(-1)


@pytest.mark.asyncio
async def test_invalid_start_date_is_rejected(api):
    with pytest.raises(ValueError):
        ConstraintsStep(SuggestionClient(api), start_date="2024-02-30")


@pytest.mark.asyncio
async def test_generate_with_no_days_is_refused(api, backend):
    step = _step(api)
    for day in range(7):
        step.toggle_day(day)
    assert not step.can_generate
    with pytest.raises(WorkflowStateError):
        await step.generate()
    assert "generate" not in backend.requests
    assert step.state is ConstraintsState.EDITING


@pytest.mark.asyncio
async def test_generate_sends_constraints_and_returns_week(api, backend):
    step = _step(api, prefer_simple=True)
    step.toggle_day(5)
    step.toggle_day(6)

    result = await step.generate()

    assert step.state is ConstraintsState.DONE
    assert step.result is result
    assert backend.requests["generate"] == [{
        "startDate": MONDAY,
        "daysToSkip": [5, 6],
        "avoidRepeats": True,
        "preferSimple": True,
        "vegetarianOnly": False,
    }]
    assert result.constraints.days_to_skip == [5, 6]
    assert [s.date for s in result.suggestions][0] == MONDAY
    assert len(result.suggestions) == 7
    assert [s.is_skipped for s in result.suggestions] == [False] * 5 + [True] * 2
    assert all(s.recipe is None for s in result.suggestions if s.is_skipped)
    # prefer simple only offers simple recipes
    assert {s.recipe.complexity for s in result.suggestions if s.recipe} == {"simple"}


@pytest.mark.asyncio
async def test_generate_failure_returns_to_editing_with_alert(api, backend, notifier, alerts):
    backend.fail.add("generate")
    step = _step(api, notifier)

    assert await step.generate() is None
    assert step.state is ConstraintsState.EDITING
    assert step.result is None
    assert len(alerts) == 1
    name, options = alerts[0]
    assert name == "alert.error"
    assert options.title == GENERATION_ERROR_TITLE
    assert options.message == GENERATION_ERROR_MESSAGE

    # nothing is retried automatically; the user tries again
    assert len(backend.requests["generate"]) == 1
    backend.fail.discard("generate")
    assert await step.generate() is not None


@pytest.mark.asyncio
async def test_days_are_locked_after_generation_until_reset(api):
    step = _step(api)
    await step.generate()
    with pytest.raises(WorkflowStateError):
        step.toggle_day(1)
    with pytest.raises(WorkflowStateError):
        await step.generate()

    step.reset()
    assert step.state is ConstraintsState.EDITING
    assert step.result is None
    step.toggle_day(1)
    assert step.days_to_skip() == [1]


@pytest.mark.asyncio
async def test_labels(api):
    step = _step(api)
    assert step.day_label(0) == "Jun 10"
    assert step.day_label(6) == "Jun 16"
    assert step.week_label() == "Week of June 10"
