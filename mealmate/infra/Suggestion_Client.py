"""Typed access to the weekly suggestion endpoints (generate, alternative, approve)."""
import logging
from typing import List, Optional

from mealmate.domain.DaySuggestion import DaySuggestion
from mealmate.domain.Plan import Plan
from mealmate.domain.Recipe import Recipe
from mealmate.infra.api_client import ApiClient, ApiError
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import AlternativeRequestInput, SuggestionConstraintsInput

logger = logging.getLogger(__name__)

SUGGESTIONS = ENDPOINTS["suggestions"]


class ApprovalResponse:
    def __init__(self, message: str, plans: List[Plan]):
        self.message = message
        self.plans = plans

    @staticmethod
    def from_dict(data):
        return ApprovalResponse(
            message=data.get("message", ""),
            plans=[Plan.from_dict(p) for p in data.get("plans", [])],
        )


class SuggestionClient:
    def __init__(self, client: ApiClient):
        self.client = client

    async def generate_suggestions(self, constraints: SuggestionConstraintsInput) -> List[DaySuggestion]:
        """One suggestion per date of the week starting at ``constraints.start_date``."""
        data = await self.client.post(f"{SUGGESTIONS}/generate", json=constraints.to_payload())
        suggestions = [DaySuggestion.from_dict(d) for d in data or []]
        logger.info("Generated %d suggestions for week of %s", len(suggestions), constraints.start_date)
        return suggestions

    async def get_alternative(self, date: str, excluded_recipe_ids: Optional[List[str]] = None,
                              avoid_repeats: bool = False, prefer_simple: bool = False,
                              vegetarian_only: bool = False) -> Recipe:
        """A recipe for ``date`` that is not one of ``excluded_recipe_ids``."""
        body = AlternativeRequestInput(
            date=date,
            exclude_recipe_ids=list(excluded_recipe_ids or []),
            avoid_repeats=avoid_repeats,
            prefer_simple=prefer_simple,
            vegetarian_only=vegetarian_only,
        )
        data = await self.client.post(f"{SUGGESTIONS}/alternative", json=body.to_payload())
        if not isinstance(data, dict) or not data.get("_id"):
            raise ApiError(f"No alternative recipe returned for {date}")
        return Recipe.from_dict(data)

    async def approve_suggestions(self, suggestions: List[DaySuggestion]) -> ApprovalResponse:
        """Persist the whole working set as plans; succeeds or fails as one batch."""
        data = await self.client.post(
            f"{SUGGESTIONS}/approve",
            json={"suggestions": [s.to_dict() for s in suggestions]},
        )
        return ApprovalResponse.from_dict(data or {})
