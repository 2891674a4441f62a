"""Grocery lists: build one from the dinners planned in a date range, then shop it.

In store mode the items are walked section by section in the chosen store's
category order, and checked off as they go in the cart.
"""
import asyncio
import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from mealmate.domain.GroceryList import GroceryItem, GroceryList
from mealmate.domain.Plan import Plan
from mealmate.domain.Store import Store
from mealmate.domain.User import User
from mealmate.events.notifications import ConfirmOptions, Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.GroceryList_Repository import GroceryListRepository
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.logic.settings.optimistic import OptimisticUpdate
from mealmate.utilities.constants import STORE_CATEGORIES
from mealmate.utilities.dateutils import add_days, get_today_string, parse_date

logger = logging.getLogger(__name__)

SELECTABLE_DAYS = 21
PICK_START = "start"
PICK_END = "end"


class Section(NamedTuple):
    category: str
    entries: List[Tuple[int, object]]


def group_by_category(items: Sequence, category_order: Iterable[str] = STORE_CATEGORIES,
                      query: str = "") -> List[Section]:
    """Group ``items`` (anything with ``name`` and ``category``) into sections.

    Sections follow ``category_order``; categories it does not name come last
    in alphabetical order. Each entry keeps the item's index in ``items``.
    Empty sections are left out.
    """
    query = query.strip().lower()
    grouped = {}
    for index, item in enumerate(items):
        if query and query not in item.name.lower():
            continue
        grouped.setdefault(item.category, []).append((index, item))

    order = list(category_order)
    order += sorted(c for c in grouped if c not in order)
    return [Section(category, grouped[category]) for category in order if category in grouped]


def can_delete(user: Optional[User]) -> bool:
    """Only household admins, or users outside a household, may delete shared lists and staples."""
    return user is None or not user.in_household or user.is_admin


class GroceryListBuilder:
    """Pick a date range, then build a list from the meals planned in it.

    Tapping a date either moves the start or the end of the range, following
    ``picking``: a tap outside picking mode starts a new range.
    """

    def __init__(self, plan_repository: PlanRepository, list_repository: GroceryListRepository,
                 notifier: Optional[Notifier] = None, today: Optional[str] = None):
        self.plans_repo = plan_repository
        self.lists = list_repository
        self.notifier = notifier
        self.today = today or get_today_string()
        self.start_date = self.today
        self.end_date = add_days(self.today, 6)
        self.picking: Optional[str] = None
        self.plans: List[Plan] = []

    def selectable_dates(self) -> List[str]:
        return [add_days(self.today, i) for i in range(SELECTABLE_DAYS)]

    @property
    def day_count(self) -> int:
        return (parse_date(self.end_date) - parse_date(self.start_date)).days + 1

    def in_range(self, date: str) -> bool:
        return self.start_date <= date <= self.end_date

    def tap_date(self, date: str) -> None:
        parse_date(date)
        if self.picking == PICK_START:
            self.start_date = date
            if date > self.end_date:
                self.end_date = date
            self.picking = PICK_END
        elif self.picking == PICK_END:
            if date < self.start_date:
                self.start_date = date
            self.end_date = date
            self.picking = None
        else:
            self.start_date = date
            if date > self.end_date:
                self.end_date = date
            self.picking = PICK_END

    async def load_plans(self) -> List[Plan]:
        """The plans in range that carry a recipe; empty when the fetch fails."""
        try:
            plans = await self.plans_repo.get_week_plans(self.start_date, self.day_count)
        except ApiError as e:
            logger.warning("Error loading plans for %s..%s: %s", self.start_date, self.end_date, e)
            plans = []
        self.plans = [p for p in plans if p.has_recipe()]
        return self.plans

    async def generate(self, name: Optional[str] = None) -> Optional[GroceryList]:
        if not self.plans:
            if self.notifier:
                self.notifier.info("No Plans", "There are no planned meals in this range. Plan some meals first!")
            return None
        try:
            grocery_list = await self.lists.create(self.start_date, self.end_date, name)
        except ApiError as e:
            logger.error("Error generating grocery list: %s", e)
            if self.notifier:
                self.notifier.error("Error", e.message or "Failed to generate grocery list")
            return None
        logger.info("Built grocery list %s with %d items", grocery_list.id, len(grocery_list.items))
        return grocery_list


class ShoppingTrip:
    """One grocery list in store mode."""

    def __init__(self, list_repository: GroceryListRepository, grocery_list: GroceryList,
                 store: Optional[Store] = None, notifier: Optional[Notifier] = None):
        self.lists = list_repository
        self.grocery_list = grocery_list
        self.store = store
        self.notifier = notifier
        self._optimistic = OptimisticUpdate(lambda: self.grocery_list, self._set_list)

    def _set_list(self, grocery_list: GroceryList) -> None:
        self.grocery_list = grocery_list

    @classmethod
    async def open(cls, list_repository: GroceryListRepository, list_id: str,
                   store: Optional[Store] = None,
                   notifier: Optional[Notifier] = None) -> Optional["ShoppingTrip"]:
        try:
            grocery_list = await list_repository.get_by_id(list_id)
        except ApiError as e:
            logger.error("Error loading grocery list %s: %s", list_id, e)
            if notifier:
                notifier.error("Error", "Failed to load grocery list")
            return None
        return cls(list_repository, grocery_list, store, notifier)

    @property
    def category_order(self) -> List[str]:
        return list(self.store.category_order) if self.store else list(STORE_CATEGORIES)

    def sections(self, query: str = "") -> List[Section]:
        return group_by_category(self.grocery_list.items, self.category_order, query)

    def item(self, index: int) -> GroceryItem:
        return self.grocery_list.items[index]

    async def toggle_item(self, index: int) -> bool:
        """Check or uncheck one item; shown at once and reverted quietly on failure."""
        checked = not self.item(index).is_checked
        list_id = self.grocery_list.id

        async def commit(_grocery_list):
            self.grocery_list = await self.lists.update_item(list_id, index, is_checked=checked)

        ok = await self._optimistic.apply(
            lambda grocery_list: grocery_list.with_item(index, grocery_list.items[index].replace(is_checked=checked)),
            commit,
        )
        if ok and checked and self.grocery_list.is_complete and self.notifier:
            self.notifier.success("All Done!", "Everything on the list is in the cart.")
        return ok

    async def add_item(self, name: str, quantity: Optional[str] = None,
                       category: Optional[str] = None) -> bool:
        if not name.strip():
            return False
        try:
            self.grocery_list = await self.lists.add_item(self.grocery_list.id, name, quantity, category)
        except ApiError as e:
            logger.error("Error adding %r to grocery list: %s", name, e)
            if self.notifier:
                self.notifier.error("Error", "Failed to add item")
            return False
        return True

    def remove_item(self, index: int) -> ConfirmOptions:
        """Ask before removing; ``on_confirm`` starts ``confirm_remove`` and returns its task."""
        self.item(index)
        options = dict(
            confirm_text="Remove",
            cancel_text="Cancel",
            destructive=True,
            on_confirm=lambda: asyncio.ensure_future(self.confirm_remove(index)),
        )
        if self.notifier:
            return self.notifier.confirm("Remove Item", "Remove this item from the list?", **options)
        return ConfirmOptions(title="Remove Item", message="Remove this item from the list?", **options)

    async def confirm_remove(self, index: int) -> bool:
        try:
            self.grocery_list = await self.lists.remove_item(self.grocery_list.id, index)
        except ApiError as e:
            logger.error("Error removing item %d: %s", index, e)
            if self.notifier:
                self.notifier.error("Error", "Failed to remove item")
            return False
        return True


class GroceryHistory:
    """Past and current grocery lists, newest first."""

    def __init__(self, list_repository: GroceryListRepository, notifier: Optional[Notifier] = None,
                 user: Optional[User] = None):
        self.lists_repo = list_repository
        self.notifier = notifier
        self.user = user
        self.lists: List[GroceryList] = []

    @property
    def can_delete(self) -> bool:
        return can_delete(self.user)

    def get(self, list_id: str) -> GroceryList:
        for grocery_list in self.lists:
            if grocery_list.id == list_id:
                return grocery_list
        raise KeyError(f"No grocery list {list_id}")

    async def load(self) -> List[GroceryList]:
        try:
            self.lists = await self.lists_repo.get_all()
        except ApiError as e:
            logger.warning("Error loading grocery lists: %s", e)
            self.lists = []
        return self.lists

    def toggle_archive(self, list_id: str) -> ConfirmOptions:
        """Ask to archive an active list, or restore an archived one."""
        grocery_list = self.get(list_id)
        status = "active" if grocery_list.is_archived else "archived"
        action = "Restore" if grocery_list.is_archived else "Archive"
        options = dict(
            confirm_text=action,
            cancel_text="Cancel",
            on_confirm=lambda: asyncio.ensure_future(self.set_status(list_id, status)),
        )
        title, message = f"{action} List", f'{action} "{grocery_list.name}"?'
        if self.notifier:
            return self.notifier.confirm(title, message, **options)
        return ConfirmOptions(title=title, message=message, **options)

    async def set_status(self, list_id: str, status: str) -> bool:
        try:
            await self.lists_repo.update(list_id, status=status)
        except ApiError as e:
            logger.error("Error setting grocery list %s to %s: %s", list_id, status, e)
            if self.notifier:
                action = "archive" if status == "archived" else "restore"
                self.notifier.error("Error", f"Failed to {action} list")
            return False
        self.lists = [g.replace(status=status) if g.id == list_id else g for g in self.lists]
        return True

    def delete(self, list_id: str) -> ConfirmOptions:
        self.get(list_id)
        if not self.can_delete:
            raise PermissionError("Only household admins can delete grocery lists")
        options = dict(
            confirm_text="Delete",
            cancel_text="Cancel",
            destructive=True,
            on_confirm=lambda: asyncio.ensure_future(self.confirm_delete(list_id)),
        )
        message = "Are you sure you want to delete this grocery list?"
        if self.notifier:
            return self.notifier.confirm("Delete List", message, **options)
        return ConfirmOptions(title="Delete List", message=message, **options)

    async def confirm_delete(self, list_id: str) -> bool:
        try:
            await self.lists_repo.delete(list_id)
        except ApiError as e:
            logger.error("Error deleting grocery list %s: %s", list_id, e)
            if self.notifier:
                self.notifier.error("Error", "Failed to delete list")
            return False
        self.lists = [g for g in self.lists if g.id != list_id]
        return True
