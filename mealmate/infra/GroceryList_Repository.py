from typing import List, Optional

from mealmate.domain.GroceryList import GroceryList
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import (
    AddStaplesInput,
    CreateGroceryListInput,
    GroceryItemInput,
    GroceryItemUpdateInput,
    GroceryListUpdateInput,
)

GROCERY_LISTS = ENDPOINTS["grocery_lists"]


class GroceryListRepository:
    """Every item edit answers with the whole updated list."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def create(self, start_date: str, end_date: str, name: Optional[str] = None) -> GroceryList:
        body = CreateGroceryListInput(start_date=start_date, end_date=end_date, name=name)
        return GroceryList.from_dict(await self.client.post(GROCERY_LISTS, json=body.to_payload()))

    async def get_all(self, status: Optional[str] = None) -> List[GroceryList]:
        data = await self.client.get(GROCERY_LISTS, params={"status": status} if status else None)
        return [GroceryList.from_dict(g) for g in data or []]

    async def get_by_id(self, list_id: str) -> GroceryList:
        return GroceryList.from_dict(await self.client.get(f"{GROCERY_LISTS}/{list_id}"))

    async def update(self, list_id: str, name: Optional[str] = None,
                     status: Optional[str] = None) -> GroceryList:
        body = GroceryListUpdateInput(name=name, status=status)
        return GroceryList.from_dict(await self.client.put(f"{GROCERY_LISTS}/{list_id}", json=body.to_payload()))

    async def update_item(self, list_id: str, index: int, is_checked: Optional[bool] = None,
                          quantity: Optional[str] = None, name: Optional[str] = None) -> GroceryList:
        body = GroceryItemUpdateInput(is_checked=is_checked, quantity=quantity, name=name)
        data = await self.client.put(f"{GROCERY_LISTS}/{list_id}/items/{index}", json=body.to_payload())
        return GroceryList.from_dict(data)

    async def add_item(self, list_id: str, name: str, quantity: Optional[str] = None,
                       category: Optional[str] = None, save_to_staples: bool = True) -> GroceryList:
        """Add an item by hand; the server also remembers it as a staple unless told not to."""
        body = GroceryItemInput(name=name, quantity=quantity, category=category,
                                save_to_staples=save_to_staples)
        data = await self.client.post(f"{GROCERY_LISTS}/{list_id}/items", json=body.to_payload())
        return GroceryList.from_dict(data)

    async def remove_item(self, list_id: str, index: int) -> GroceryList:
        return GroceryList.from_dict(await self.client.delete(f"{GROCERY_LISTS}/{list_id}/items/{index}"))

    async def add_staples(self, list_id: str, staple_ids: List[str]) -> GroceryList:
        body = AddStaplesInput(staple_ids=staple_ids)
        data = await self.client.post(f"{GROCERY_LISTS}/{list_id}/staples", json=body.to_payload())
        return GroceryList.from_dict(data)

    async def delete(self, list_id: str) -> None:
        await self.client.delete(f"{GROCERY_LISTS}/{list_id}")
