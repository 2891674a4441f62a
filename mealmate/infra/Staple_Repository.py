from typing import List, Optional

from mealmate.domain.Staple import Staple
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import GroceryItemInput

STAPLES = ENDPOINTS["staples"]


class StapleRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Staple]:
        data = await self.client.get(STAPLES)
        return [Staple.from_dict(s) for s in data or []]

    async def upsert(self, name: str, quantity: Optional[str] = None,
                     category: Optional[str] = None) -> Staple:
        """Create a staple, or bump the one with the same name (case-insensitive)."""
        body = GroceryItemInput(name=name, quantity=quantity, category=category)
        return Staple.from_dict(await self.client.post(STAPLES, json=body.to_payload()))

    async def delete(self, staple_id: str) -> None:
        await self.client.delete(f"{STAPLES}/{staple_id}")

    async def clear_all(self) -> None:
        await self.client.delete(STAPLES)
