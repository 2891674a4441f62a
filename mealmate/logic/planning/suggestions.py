"""Second step of the planning wizard: review, adjust and approve a suggested week.

The step owns the live suggestion list for one planning session. Every
change to a day is built as a whole new ``DaySuggestion`` and swapped in by
date, so a failed network call never leaves a day half updated.

Manual picks are persisted by the picker directly on the server, so the
step learns about them only through ``refresh()``, which the presentation
layer calls each time the step regains focus.
"""
import logging
from enum import Enum
from typing import Dict, List, Optional

from mealmate.domain.DaySuggestion import DaySuggestion, STATE_RECIPE, STATE_SKIPPED
from mealmate.domain.Recipe import Recipe
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.planning.approval import ApprovalResult
from mealmate.logic.planning.errors import WorkflowStateError
from mealmate.utilities.constants import WEEK_LENGTH
from mealmate.utilities.validators import SuggestionConstraintsInput

logger = logging.getLogger(__name__)

ACTION_ALTERNATIVE = "alternative"
ACTION_PICK = "pick"

APPROVE_ERROR_TITLE = "Error"
APPROVE_ERROR_MESSAGE = "Failed to save your meal plan. Please try again."


class SuggestionsState(str, Enum):
    INTERACTIVE = "interactive"
    APPROVING = "approving"
    APPROVED = "approved"


class PickerRequest:
    """Hand-off to the manual recipe picker for one date."""

    def __init__(self, date: str, current_suggestions: List[DaySuggestion]):
        self.date = date
        self.current_suggestions = current_suggestions


class SuggestionsStep:
    def __init__(self, constraints: SuggestionConstraintsInput, suggestions: List[DaySuggestion],
                 suggestion_client: SuggestionClient, plan_repository: PlanRepository,
                 notifier: Optional[Notifier] = None):
        self.constraints = constraints
        self.suggestions: List[DaySuggestion] = list(suggestions)
        self.client = suggestion_client
        self.plans = plan_repository
        self.notifier = notifier
        self.state = SuggestionsState.INTERACTIVE
        self.result: Optional[ApprovalResult] = None
        self.loading_days: set = set()
        # Reconciliation window: the week as it was first generated
        self.start_date: Optional[str] = suggestions[0].date if suggestions else None
        # Every recipe shown per date this session (initial pick + alternatives)
        self.excluded_recipe_ids: Dict[str, List[str]] = {
            s.date: [s.recipe_id] for s in suggestions if s.recipe_id
        }
        self._request_seq: Dict[str, int] = {}

    @classmethod
    def from_generation(cls, result, suggestion_client: SuggestionClient,
                        plan_repository: PlanRepository, notifier: Optional[Notifier] = None):
        return cls(result.constraints, result.suggestions, suggestion_client, plan_repository, notifier)

    # --- queries ---
    def get(self, date: str) -> DaySuggestion:
        for s in self.suggestions:
            if s.date == date:
                return s
        raise KeyError(f"No suggestion for {date}")

    def meal_count(self) -> int:
        return sum(1 for s in self.suggestions if not s.is_skipped and s.recipe is not None)

    def available_actions(self, date: str) -> List[str]:
        state = self.get(date).display_state()
        if state == STATE_SKIPPED:
            return []
        if state == STATE_RECIPE:
            return [ACTION_ALTERNATIVE, ACTION_PICK]
        # nothing suitable was generated for this day
        return [ACTION_PICK]

    def is_loading(self, date: str) -> bool:
        return date in self.loading_days

    # --- transitions ---
    def _require_interactive(self) -> None:
        if self.state is not SuggestionsState.INTERACTIVE:
            raise WorkflowStateError(f"Suggestions are {self.state.value}")

    def _replace(self, day: DaySuggestion) -> None:
        self.suggestions = [day if s.date == day.date else s for s in self.suggestions]

    async def request_alternative(self, date: str) -> Optional[Recipe]:
        """Swap ``date``'s recipe for one not yet shown for that date.

        Failures are logged and leave the day unchanged. When several
        requests for the same date overlap, only the latest one is applied.
        """
        self._require_interactive()
        if ACTION_ALTERNATIVE not in self.available_actions(date):
            raise WorkflowStateError(f"No alternative can be requested for {date}")

        seq = self._request_seq.get(date, 0) + 1
        self._request_seq[date] = seq
        excluded = list(self.excluded_recipe_ids.get(date, []))
        self.loading_days.add(date)
        try:
            alternative = await self.client.get_alternative(date, excluded, **self.constraints.filters())
        except ApiError as e:
            logger.warning("Error getting alternative for %s: %s", date, e)
            return None
        finally:
            if self._request_seq.get(date) == seq:
                self.loading_days.discard(date)

        if self._request_seq.get(date) != seq:
            logger.info("Discarding superseded alternative %s for %s", alternative.id, date)
            return None
        if self.state is not SuggestionsState.INTERACTIVE:
            logger.info("Discarding alternative for %s, suggestions are %s", date, self.state.value)
            return None

        self._replace(self.get(date).with_recipe(alternative))
        self.excluded_recipe_ids[date] = self.excluded_recipe_ids.get(date, []) + [alternative.id]
        return alternative

    def pick_manually(self, date: str) -> PickerRequest:
        """Build the picker hand-off; the picker saves its choice on the server."""
        self._require_interactive()
        if ACTION_PICK not in self.available_actions(date):
            raise WorkflowStateError(f"{date} is skipped")
        return PickerRequest(date, [s.copy() for s in self.suggestions])

    async def refresh(self) -> bool:
        """Overwrite local days with the server's plans that carry a recipe.

        Server wins. Safe to call any number of times; a failed fetch is
        logged and leaves the local list as it was.
        """
        if self.start_date is None or self.state is not SuggestionsState.INTERACTIVE:
            return False
        try:
            plans = await self.plans.get_week_plans(self.start_date, WEEK_LENGTH)
        except ApiError as e:
            logger.warning("Error reloading plans for week of %s: %s", self.start_date, e)
            return False

        by_date = {p.date: p for p in plans}
        refreshed = []
        for s in self.suggestions:
            plan = by_date.get(s.date)
            if plan is not None and plan.recipe is not None:
                logger.debug("Updated suggestion for %s with recipe %s", s.date, plan.recipe.title)
                s = s.with_recipe(plan.recipe, plan.recipe_id)
            refreshed.append(s)
        self.suggestions = refreshed
        return True

    async def approve(self) -> Optional[ApprovalResult]:
        """Persist the whole list, skipped days included.

        On failure the step returns to interactive with every local edit
        kept, an error alert is published and ``None`` is returned.
        """
        if self.state is SuggestionsState.APPROVING:
            raise WorkflowStateError("Approval already in progress")
        self._require_interactive()

        self.state = SuggestionsState.APPROVING
        try:
            response = await self.client.approve_suggestions(self.suggestions)
        except ApiError as e:
            logger.error("Error approving suggestions: %s", e)
            self.state = SuggestionsState.INTERACTIVE
            if self.notifier:
                self.notifier.error(APPROVE_ERROR_TITLE, APPROVE_ERROR_MESSAGE)
            return None

        self.result = ApprovalResult(response.plans, response.message)
        self.state = SuggestionsState.APPROVED
        logger.info("Approved %d plans starting %s", len(response.plans), self.start_date)
        return self.result
