from typing import List, Optional

from mealmate.domain.Store import Store
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import StoreUpdateInput

STORES = ENDPOINTS["stores"]


class StoreRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Store]:
        data = await self.client.get(STORES)
        return [Store.from_dict(s) for s in data or []]

    async def create(self, name: str, category_order: Optional[List[str]] = None,
                     image_url: Optional[str] = None) -> Store:
        body = StoreUpdateInput(name=name, category_order=category_order, image_url=image_url)
        return Store.from_dict(await self.client.post(STORES, json=body.to_payload()))

    async def update(self, store_id: str, name: Optional[str] = None,
                     category_order: Optional[List[str]] = None,
                     is_default: Optional[bool] = None,
                     image_url: Optional[str] = None) -> Store:
        body = StoreUpdateInput(name=name, category_order=category_order,
                                is_default=is_default, image_url=image_url)
        return Store.from_dict(await self.client.put(f"{STORES}/{store_id}", json=body.to_payload()))

    async def delete(self, store_id: str) -> None:
        await self.client.delete(f"{STORES}/{store_id}")

    async def reorder(self, store_ids: List[str]) -> List[Store]:
        data = await self.client.put(f"{STORES}/reorder", json={"storeIds": store_ids})
        return [Store.from_dict(s) for s in data or []]
