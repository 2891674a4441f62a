"""First step of the planning wizard: choose cooking days and preferences, then generate.

States: editing -> generating -> done, or back to editing when generation
fails. Nothing is retried automatically.
"""
import logging
from enum import Enum
from typing import List, Optional

from mealmate.domain.DaySuggestion import DaySuggestion
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.planning.errors import WorkflowStateError
from mealmate.utilities.constants import ALL_DAYS
from mealmate.utilities.dateutils import add_days, format_date_string, get_next_monday, parse_date
from mealmate.utilities.validators import SuggestionConstraintsInput

logger = logging.getLogger(__name__)

GENERATION_ERROR_TITLE = "Oops!"
GENERATION_ERROR_MESSAGE = "Something went wrong generating your meal plan. Please try again."


class ConstraintsState(str, Enum):
    EDITING = "editing"
    GENERATING = "generating"
    DONE = "done"


class GenerationResult:
    """What the suggestions step starts from."""

    def __init__(self, constraints: SuggestionConstraintsInput, suggestions: List[DaySuggestion]):
        self.constraints = constraints
        self.suggestions = suggestions


class ConstraintsStep:
    def __init__(self, suggestion_client: SuggestionClient, notifier: Optional[Notifier] = None,
                 start_date: Optional[str] = None, avoid_repeats: bool = True,
                 prefer_simple: bool = False, vegetarian_only: bool = False):
        if start_date is not None:
            parse_date(start_date)
        self.client = suggestion_client
        self.notifier = notifier
        self.start_date = start_date or get_next_monday()
        self.selected_days: List[int] = list(ALL_DAYS)
        self.avoid_repeats = avoid_repeats
        self.prefer_simple = prefer_simple
        self.vegetarian_only = vegetarian_only
        self.state = ConstraintsState.EDITING
        self.result: Optional[GenerationResult] = None

    def toggle_day(self, day_index: int) -> List[int]:
        """Flip ``day_index`` (0=Monday..6=Sunday) in or out of the cooking days."""
        if day_index not in ALL_DAYS:
            raise ValueError(f"day_index must be between 0 and 6, got {day_index}")
        if self.state is not ConstraintsState.EDITING:
            raise WorkflowStateError(f"Cannot change days while {self.state.value}")
        if day_index in self.selected_days:
            self.selected_days = [d for d in self.selected_days if d != day_index]
        else:
            self.selected_days = sorted(self.selected_days + [day_index])
        return self.selected_days

    def days_to_skip(self) -> List[int]:
        return [d for d in ALL_DAYS if d not in self.selected_days]

    @property
    def can_generate(self) -> bool:
        return self.state is ConstraintsState.EDITING and bool(self.selected_days)

    def day_label(self, day_index: int) -> str:
        return format_date_string(add_days(self.start_date, day_index), weekday=None, month="short")

    def week_label(self) -> str:
        return f"Week of {format_date_string(self.start_date, weekday=None)}"

    def build_constraints(self) -> SuggestionConstraintsInput:
        return SuggestionConstraintsInput(
            start_date=self.start_date,
            days_to_skip=self.days_to_skip(),
            avoid_repeats=self.avoid_repeats,
            prefer_simple=self.prefer_simple,
            vegetarian_only=self.vegetarian_only,
        )

    async def generate(self) -> Optional[GenerationResult]:
        """Ask the backend for a week of suggestions.

        Returns the result on success. On failure the step goes back to
        editing, an error alert is published and ``None`` is returned.
        """
        if not self.selected_days:
            raise WorkflowStateError("Select at least one day to cook")
        if self.state is not ConstraintsState.EDITING:
            raise WorkflowStateError(f"Cannot generate while {self.state.value}")

        constraints = self.build_constraints()
        self.state = ConstraintsState.GENERATING
        try:
            suggestions = await self.client.generate_suggestions(constraints)
        except ApiError as e:
            logger.error("Error generating suggestions: %s", e)
            self.state = ConstraintsState.EDITING
            if self.notifier:
                self.notifier.error(GENERATION_ERROR_TITLE, GENERATION_ERROR_MESSAGE)
            return None

        self.result = GenerationResult(constraints, suggestions)
        self.state = ConstraintsState.DONE
        return self.result

    def reset(self) -> None:
        """Return to editing (the user came back from the suggestions step)."""
        self.state = ConstraintsState.EDITING
        self.result = None
