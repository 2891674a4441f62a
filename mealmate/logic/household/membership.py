"""Household membership and recipe submissions, gated by the member's role.

Admins see pending submissions and can review them; leaving as an admin
deletes the whole household.
"""
import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError

from mealmate.domain.Household import Household, RecipeSubmission
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Household_Repository import HouseholdRepository, SubmissionRepository
from mealmate.logic.auth.session import AuthSession

logger = logging.getLogger(__name__)

ADMIN_LEAVE_MESSAGE = (
    "As the household admin, leaving will delete the entire household and remove all members. "
    "This cannot be undone."
)
MEMBER_LEAVE_MESSAGE = (
    "Are you sure you want to leave this household? You will lose access to shared recipes and plans."
)


def extract_invite_token(invite: str) -> str:
    """Accept either a bare token or a full invitation URL (``.../join/<token>``)."""
    token = invite.strip()
    if "join/" in token:
        token = token.split("join/", 1)[1]
    return token.strip("/")


class HouseholdManager:
    def __init__(self, session: AuthSession, households: HouseholdRepository,
                 submissions: SubmissionRepository, notifier: Notifier):
        self.session = session
        self.households = households
        self.submissions = submissions
        self.notifier = notifier
        self.household: Optional[Household] = None
        self.pending: List[RecipeSubmission] = []

    @property
    def is_admin(self) -> bool:
        return self.session.user is not None and self.session.user.is_admin

    @property
    def in_household(self) -> bool:
        return self.session.user is not None and self.session.user.in_household

    def _fail(self, error: ApiError, fallback: str) -> None:
        self.notifier.error("Error", error.message or fallback)

    async def load(self) -> Optional[Household]:
        if not self.in_household:
            self.household, self.pending = None, []
            return None

        async def no_submissions():
            return []

        try:
            self.household, self.pending = await asyncio.gather(
                self.households.get_household(),
                self.submissions.get_pending() if self.is_admin else no_submissions(),
            )
        except ApiError as e:
            logger.error("Error loading household data: %s", e)
        return self.household

    async def create(self, name: str) -> Optional[Household]:
        if not name.strip():
            self.notifier.error("Error", "Please enter a household name")
            return None
        # the user may have joined a household on another device
        await self.session.refresh_user()
        if self.in_household:
            self.notifier.error(
                "Error", "You are already in a household. Please leave your current household first.")
            return None
        try:
            self.household = await self.households.create_household(name)
        except ApiError as e:
            logger.error("Error creating household: %s", e)
            self._fail(e, "Failed to create household")
            return None
        await self.session.refresh_user()
        self.notifier.success("Success", f"Household '{self.household.name}' created")
        return self.household

    async def join(self, invite: str) -> bool:
        token = extract_invite_token(invite)
        if not token:
            return False
        try:
            await self.households.join_household(token)
        except ApiError as e:
            logger.error("Error joining household: %s", e)
            self._fail(e, "Failed to join household")
            return False
        await self.session.refresh_user()
        await self.load()
        self.notifier.success("Success", "You joined the household")
        return True

    async def invite(self) -> Optional[str]:
        try:
            return await self.households.generate_invite()
        except ApiError as e:
            logger.error("Error generating invite: %s", e)
            self._fail(e, "Failed to generate invitation")
            return None

    @staticmethod
    def invite_message(invite_url: str) -> str:
        return f"Join my household on Meal Mate! {invite_url}"

    def leave_message(self) -> str:
        return ADMIN_LEAVE_MESSAGE if self.is_admin else MEMBER_LEAVE_MESSAGE

    async def leave(self) -> bool:
        try:
            if self.is_admin:
                await self.households.delete_household()
            else:
                await self.households.leave_household()
        except ApiError as e:
            logger.error("Error leaving household: %s", e)
            self._fail(e, "Failed to leave household")
            return False
        await self.session.refresh_user()
        self.household, self.pending = None, []
        self.notifier.success("Success", "Left household successfully")
        return True

    async def submit_recipe(self, recipe_url: str) -> Optional[RecipeSubmission]:
        if not self.in_household:
            self.notifier.error("Error", "Join a household to submit recipes")
            return None
        try:
            submission = await self.submissions.submit_recipe(recipe_url)
        except ValidationError:
            self.notifier.error("Error", "Please enter a valid recipe URL")
            return None
        except ApiError as e:
            logger.error("Error submitting recipe: %s", e)
            self._fail(e, "Failed to submit recipe")
            return None
        self.notifier.success("Submitted", "Your recipe was sent to the household admin for review")
        return submission

    async def review(self, submission_id: str, action: str,
                     review_notes: Optional[str] = None) -> Optional[RecipeSubmission]:
        if not self.is_admin:
            raise PermissionError("Only household admins can review submissions")
        try:
            reviewed = await self.submissions.review(submission_id, action, review_notes)
        except ApiError as e:
            logger.error("Error reviewing submission %s: %s", submission_id, e)
            self._fail(e, "Failed to review submission")
            return None
        self.pending = [s for s in self.pending if s.id != submission_id]
        return reviewed
