"""Manual recipe picker for one date.

Whatever the user picks is saved straight to the server with
``PUT plans/:date`` (unconfirmed); the caller then refreshes its own view.
"""
import logging
from typing import List, Optional

from mealmate.domain.DaySuggestion import DaySuggestion
from mealmate.domain.Plan import Plan
from mealmate.domain.Recipe import Recipe
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.infra.Recipe_Repository import RecipeRepository
from mealmate.utilities.constants import LABEL_EATING_OUT, LABEL_TBD

logger = logging.getLogger(__name__)


class RecipePicker:
    def __init__(self, date: str, recipe_repository: RecipeRepository,
                 plan_repository: PlanRepository, notifier: Optional[Notifier] = None,
                 current_suggestions: Optional[List[DaySuggestion]] = None):
        self.date = date
        self.recipes_repo = recipe_repository
        self.plans = plan_repository
        self.notifier = notifier
        self.current_suggestions = current_suggestions or []
        self.recipes: List[Recipe] = []

    @classmethod
    def for_request(cls, request, recipe_repository: RecipeRepository,
                    plan_repository: PlanRepository, notifier: Optional[Notifier] = None):
        return cls(request.date, recipe_repository, plan_repository, notifier, request.current_suggestions)

    async def load(self) -> List[Recipe]:
        try:
            self.recipes = await self.recipes_repo.get_all()
        except ApiError as e:
            logger.error("Error loading recipes: %s", e)
        return self.recipes

    def filter(self, query: str = "") -> List[Recipe]:
        return [r for r in self.recipes if r.matches(query)]

    async def _save(self, failure_message: str, **changes) -> Optional[Plan]:
        try:
            plan = await self.plans.update_by_date(self.date, is_confirmed=False, **changes)
        except ApiError as e:
            logger.error("Error updating plan for %s: %s", self.date, e)
            if self.notifier:
                self.notifier.error("Error", failure_message)
            return None
        logger.info("Plan for %s updated: %s", self.date, plan.title_or_label())
        return plan

    async def select_recipe(self, recipe: Recipe) -> Optional[Plan]:
        return await self._save("Failed to select recipe. Please try again.", recipe_id=recipe.id)

    async def mark_eating_out(self) -> Optional[Plan]:
        return await self._save("Failed to mark as eating out. Please try again.", label=LABEL_EATING_OUT)

    async def mark_tbd(self) -> Optional[Plan]:
        return await self._save("Failed to mark as TBD. Please try again.", label=LABEL_TBD)
