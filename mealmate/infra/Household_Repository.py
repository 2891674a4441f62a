from typing import List, Optional

from mealmate.domain.Household import Household, RecipeSubmission
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import (
    CreateHouseholdInput,
    JoinHouseholdInput,
    ReviewSubmissionInput,
    SubmitRecipeInput,
)

HOUSEHOLD = ENDPOINTS["household"]
SUBMISSIONS = ENDPOINTS["submissions"]


class HouseholdRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_household(self) -> Household:
        data = await self.client.get(HOUSEHOLD)
        return Household.from_dict(data["household"])

    async def create_household(self, name: str) -> Household:
        body = CreateHouseholdInput(name=name)
        data = await self.client.post(HOUSEHOLD, json=body.to_payload())
        return Household.from_dict(data["household"])

    async def join_household(self, token: str) -> str:
        body = JoinHouseholdInput(token=token)
        data = await self.client.post(f"{HOUSEHOLD}/join", json=body.to_payload())
        return (data or {}).get("message", "")

    async def generate_invite(self) -> str:
        data = await self.client.post(f"{HOUSEHOLD}/invite")
        return data["inviteUrl"]

    async def leave_household(self) -> str:
        data = await self.client.delete(f"{HOUSEHOLD}/leave")
        return (data or {}).get("message", "")

    async def delete_household(self) -> str:
        """Admin only: removes the household and every membership."""
        data = await self.client.delete(HOUSEHOLD)
        return (data or {}).get("message", "")


class SubmissionRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    async def submit_recipe(self, recipe_url: str) -> RecipeSubmission:
        body = SubmitRecipeInput(recipe_url=recipe_url)
        data = await self.client.post(SUBMISSIONS, json=body.to_payload())
        return RecipeSubmission.from_dict(data["submission"])

    async def get_pending(self) -> List[RecipeSubmission]:
        data = await self.client.get(SUBMISSIONS)
        return [RecipeSubmission.from_dict(s) for s in (data or {}).get("submissions", [])]

    async def review(self, submission_id: str, action: str,
                     review_notes: Optional[str] = None) -> RecipeSubmission:
        body = ReviewSubmissionInput(action=action, review_notes=review_notes)
        data = await self.client.post(f"{SUBMISSIONS}/{submission_id}/review", json=body.to_payload())
        return RecipeSubmission.from_dict(data["submission"])
