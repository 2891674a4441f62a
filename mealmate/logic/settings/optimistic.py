"""Optimistic edits of settings lists (store category order and similar).

The pattern is snapshot, speculative apply, then commit or revert:

    1. compute the new value from the current one (no in-place mutation),
    2. show it immediately,
    3. send the persistence call,
    4. on failure put back the exact snapshot taken in step 1.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from mealmate.domain.Store import Store
from mealmate.events.notifications import ConfirmOptions, Notifier
from mealmate.infra.api_client import ApiError
from mealmate.infra.Store_Repository import StoreRepository

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"


def move_item(items: Sequence, index: int, direction: str) -> Optional[list]:
    """Return a copy of ``items`` with ``items[index]`` swapped one step up or down.

    Returns ``None`` when the move would leave the list.
    """
    if direction not in (UP, DOWN):
        raise ValueError(f"direction must be '{UP}' or '{DOWN}', got {direction!r}")
    swap_index = index - 1 if direction == UP else index + 1
    if index < 0 or index >= len(items) or swap_index < 0 or swap_index >= len(items):
        return None
    new_items = list(items)
    new_items[index], new_items[swap_index] = new_items[swap_index], new_items[index]
    return new_items


class OptimisticUpdate:
    def __init__(self, get_state: Callable[[], Any], set_state: Callable[[Any], None],
                 notifier: Optional[Notifier] = None):
        self.get_state = get_state
        self.set_state = set_state
        self.notifier = notifier

    async def apply(self, mutate: Callable[[Any], Any], commit: Callable[[Any], Awaitable[Any]],
                    failure_message: Optional[str] = None) -> bool:
        """Show ``mutate(state)`` at once, then persist it with ``commit``.

        Returns False (state restored to the snapshot) if ``commit`` fails
        with an ApiError. Any other exception also restores the snapshot and
        is re-raised.
        """
        snapshot = self.get_state()
        new_state = mutate(snapshot)
        self.set_state(new_state)
        try:
            await commit(new_state)
        except ApiError as e:
            logger.warning("Optimistic update failed, reverting: %s", e)
            self.set_state(snapshot)
            if self.notifier and failure_message:
                self.notifier.error("Error", failure_message)
            return False
        except Exception:
            self.set_state(snapshot)
            raise
        return True


class StoreSettings:
    """The user's stores as shown in the settings screen."""

    def __init__(self, store_repository: StoreRepository, notifier: Optional[Notifier] = None,
                 stores: Optional[List[Store]] = None):
        self.repo = store_repository
        self.notifier = notifier
        self.stores: List[Store] = list(stores or [])
        self._optimistic = OptimisticUpdate(lambda: self.stores, self._set_stores, notifier)

    def _set_stores(self, stores: List[Store]) -> None:
        self.stores = stores

    def get(self, store_id: str) -> Store:
        for store in self.stores:
            if store.id == store_id:
                return store
        raise KeyError(f"No store {store_id}")

    async def load(self) -> List[Store]:
        try:
            self.stores = await self.repo.get_all()
        except ApiError as e:
            logger.error("Error loading stores: %s", e)
        return self.stores

    def _replace_store(self, stores: List[Store], store_id: str, **changes) -> List[Store]:
        return [s.replace(**changes) if s.id == store_id else s for s in stores]

    async def move_category(self, store_id: str, index: int, direction: str) -> bool:
        """Move one category a step up or down in a store's walking order."""
        new_order = move_item(self.get(store_id).category_order, index, direction)
        if new_order is None:
            return False

        async def commit(_stores):
            await self.repo.update(store_id, category_order=new_order)

        return await self._optimistic.apply(
            lambda stores: self._replace_store(stores, store_id, category_order=new_order),
            commit,
        )

    async def rename_store(self, store_id: str, name: str) -> bool:
        name = name.strip()
        if not name:
            return False

        async def commit(_stores):
            await self.repo.update(store_id, name=name)

        return await self._optimistic.apply(
            lambda stores: self._replace_store(stores, store_id, name=name),
            commit,
            failure_message="Failed to rename store. Please try again.",
        )

    async def set_default(self, store_id: str) -> bool:
        """Make ``store_id`` the only default store."""
        self.get(store_id)

        async def commit(_stores):
            await self.repo.update(store_id, is_default=True)

        return await self._optimistic.apply(
            lambda stores: [s.replace(is_default=(s.id == store_id)) for s in stores],
            commit,
            failure_message="Failed to update default store. Please try again.",
        )

    async def move_store(self, index: int, direction: str) -> bool:
        """Move one store a step up or down in the store list."""
        new_stores = move_item(self.stores, index, direction)
        if new_stores is None:
            return False

        async def commit(stores):
            await self.repo.reorder([s.id for s in stores])

        return await self._optimistic.apply(lambda _stores: new_stores, commit)

    async def add_store(self, name: str) -> Optional[Store]:
        """Create a store and insert it into the list sorted by name.

        Not optimistic: the new store only appears once the server has
        given it an id.
        """
        name = name.strip()
        if not name:
            return None
        try:
            store = await self.repo.create(name)
        except ApiError as e:
            logger.error("Error creating store %r: %s", name, e)
            if self.notifier:
                self.notifier.error("Error", e.message or "Failed to create store")
            return None
        self.stores = sorted(self.stores + [store], key=lambda s: s.name.lower())
        return store

    def delete_store(self, store_id: str) -> ConfirmOptions:
        """Ask before deleting; ``on_confirm`` starts ``confirm_delete`` and returns its task."""
        store = self.get(store_id)
        options = dict(
            confirm_text="Delete",
            cancel_text="Cancel",
            destructive=True,
            icon="trash-outline",
            on_confirm=lambda: asyncio.ensure_future(self.confirm_delete(store_id)),
        )
        if self.notifier:
            return self.notifier.confirm("Delete Store", f'Delete "{store.name}"?', **options)
        return ConfirmOptions(title="Delete Store", message=f'Delete "{store.name}"?', **options)

    async def confirm_delete(self, store_id: str) -> bool:
        try:
            await self.repo.delete(store_id)
        except ApiError as e:
            logger.error("Error deleting store %s: %s", store_id, e)
            if self.notifier:
                self.notifier.error("Error", "Failed to delete store")
            return False
        self.stores = [s for s in self.stores if s.id != store_id]
        return True
