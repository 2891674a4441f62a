"""Planner home: the persisted plans of one week and quick per-day actions.

Week 0 is the upcoming week (starting next Monday); ``offset`` moves
forwards or backwards a week at a time.
"""
import logging
from typing import List, Optional, Tuple

from mealmate.domain.Plan import Plan
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.infra.Recipe_Repository import RecipeRepository
from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.planning.constraints import ConstraintsStep
from mealmate.utilities.constants import WEEK_LENGTH
from mealmate.utilities.dateutils import add_days, get_next_monday, week_dates

logger = logging.getLogger(__name__)


def week_range(offset: int = 0, from_date=None) -> Tuple[str, str]:
    """Return (start, end) of the week ``offset`` weeks after the upcoming one."""
    start = add_days(get_next_monday(from_date), offset * WEEK_LENGTH)
    return start, add_days(start, WEEK_LENGTH - 1)


class WeekPlanner:
    def __init__(self, plan_repository: PlanRepository, suggestion_client: SuggestionClient,
                 recipe_repository: RecipeRepository, notifier: Optional[Notifier] = None):
        self.plans_repo = plan_repository
        self.suggestions = suggestion_client
        self.recipes = recipe_repository
        self.notifier = notifier
        self.offset = 0
        self.plans: List[Plan] = []
        self.recipe_count = 0

    @property
    def start_date(self) -> str:
        return week_range(self.offset)[0]

    async def load(self, offset: Optional[int] = None) -> List[Plan]:
        """Reload plans (and the recipe count) for the current or given week."""
        if offset is not None:
            self.offset = offset
        try:
            self.plans = await self.plans_repo.get_week_plans(self.start_date, WEEK_LENGTH)
        except ApiError as e:
            logger.error("Error loading plans: %s", e)
        try:
            self.recipe_count = len(await self.recipes.get_all())
        except ApiError as e:
            logger.error("Error loading recipe count: %s", e)
        return self.plans

    def can_plan(self) -> bool:
        return self.recipe_count > 0

    def all_days_planned(self) -> bool:
        return len(self.plans) == WEEK_LENGTH and all(p.is_planned() for p in self.plans)

    def constraints_step(self, notifier: Optional[Notifier] = None) -> ConstraintsStep:
        """Start the suggestion wizard for the week on screen."""
        return ConstraintsStep(self.suggestions, notifier or self.notifier, start_date=self.start_date)

    async def suggest_meal(self, date: str) -> Optional[Plan]:
        """Fill one day with an unconstrained suggestion and save it."""
        if not self.can_plan():
            return None
        try:
            recipe = await self.suggestions.get_alternative(date, [])
            plan = await self.plans_repo.update_by_date(date, recipe_id=recipe.id, is_confirmed=False)
        except ApiError as e:
            logger.error("Error suggesting meal for %s: %s", date, e)
            return None
        self.plans = [plan if p.date == date else p for p in self.plans]
        if not any(p.date == date for p in self.plans):
            self.plans = sorted(self.plans + [plan], key=lambda p: p.date)
        return plan

    async def pick_manually_all(self) -> List[Plan]:
        """Create an empty, unconfirmed plan for every day of the week on screen."""
        created = []
        try:
            for date in week_dates(self.start_date, WEEK_LENGTH):
                created.append(await self.plans_repo.update_by_date(date, label="", is_confirmed=False))
        except ApiError as e:
            logger.error("Error creating empty plans: %s", e)
            return self.plans
        self.plans = created
        return self.plans
