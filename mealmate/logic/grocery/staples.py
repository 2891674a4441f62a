"""Staples: items bought every trip, kept apart from recipes and added to a list by hand."""
import asyncio
import logging
from typing import List, Optional, Set

from mealmate.domain.GroceryList import GroceryList
from mealmate.domain.Staple import Staple
from mealmate.domain.User import User
from mealmate.events.notifications import ConfirmOptions, Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.GroceryList_Repository import GroceryListRepository
from mealmate.infra.Staple_Repository import StapleRepository
from mealmate.logic.grocery.shopping import Section, can_delete, group_by_category

logger = logging.getLogger(__name__)


class StaplesBook:
    def __init__(self, staple_repository: StapleRepository, list_repository: GroceryListRepository,
                 notifier: Optional[Notifier] = None, user: Optional[User] = None):
        self.repo = staple_repository
        self.lists = list_repository
        self.notifier = notifier
        self.user = user
        self.staples: List[Staple] = []
        self.selected_ids: Set[str] = set()

    @property
    def can_delete(self) -> bool:
        return can_delete(self.user)

    def _error(self, message: str) -> None:
        if self.notifier:
            self.notifier.error("Error", message)

    def get(self, staple_id: str) -> Staple:
        for staple in self.staples:
            if staple.id == staple_id:
                return staple
        raise KeyError(f"No staple {staple_id}")

    async def load(self) -> List[Staple]:
        try:
            self.staples = await self.repo.get_all()
        except ApiError as e:
            logger.error("Error loading staples: %s", e)
            self._error("Failed to load staples")
        return self.staples

    def sections(self, query: str = "", category: Optional[str] = None) -> List[Section]:
        sections = group_by_category(self.staples, query=query)
        return [s for s in sections if category is None or s.category == category]

    def toggle_select(self, staple_id: str) -> None:
        self.get(staple_id)
        if staple_id in self.selected_ids:
            self.selected_ids.discard(staple_id)
        else:
            self.selected_ids.add(staple_id)

    async def add(self, name: str, quantity: Optional[str] = None, category: Optional[str] = None) -> bool:
        """Save a staple; an existing one with the same name is updated instead."""
        if not name.strip():
            return False
        try:
            await self.repo.upsert(name, quantity, category)
        except ApiError as e:
            logger.error("Error saving staple %r: %s", name, e)
            self._error("Failed to add staple")
            return False
        await self.load()
        return True

    def delete(self, staple_id: str) -> ConfirmOptions:
        staple = self.get(staple_id)
        if not self.can_delete:
            raise PermissionError("Only household admins can delete staples")
        options = dict(
            confirm_text="Delete",
            cancel_text="Cancel",
            destructive=True,
            icon="trash-outline",
            on_confirm=lambda: asyncio.ensure_future(self.confirm_delete(staple_id)),
        )
        message = f'Remove "{staple.name}" from your staples?'
        if self.notifier:
            return self.notifier.confirm("Delete Staple", message, **options)
        return ConfirmOptions(title="Delete Staple", message=message, **options)

    async def confirm_delete(self, staple_id: str) -> bool:
        try:
            await self.repo.delete(staple_id)
        except ApiError as e:
            logger.error("Error deleting staple %s: %s", staple_id, e)
            self._error("Failed to delete staple")
            return False
        self.selected_ids.discard(staple_id)
        await self.load()
        return True

    async def clear_all(self) -> bool:
        if not self.can_delete:
            raise PermissionError("Only household admins can clear staples")
        try:
            await self.repo.clear_all()
        except ApiError as e:
            logger.error("Error clearing staples: %s", e)
            self._error("Failed to clear staples")
            return False
        self.staples, self.selected_ids = [], set()
        return True

    async def add_selected_to_list(self, list_id: str) -> Optional[GroceryList]:
        """Append the selected staples to a grocery list; the selection is cleared on success."""
        if not self.selected_ids:
            return None
        staple_ids = [s.id for s in self.staples if s.id in self.selected_ids]
        try:
            grocery_list = await self.lists.add_staples(list_id, staple_ids)
        except ApiError as e:
            logger.error("Error adding staples to grocery list %s: %s", list_id, e)
            self._error("Failed to add staples to list")
            return None
        self.selected_ids = set()
        return grocery_list
