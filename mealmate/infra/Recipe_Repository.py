from typing import List, Optional

from mealmate.domain.Recipe import Recipe
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS

RECIPES = ENDPOINTS["recipes"]


class RecipeRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self, search: Optional[str] = None, tags: Optional[List[str]] = None) -> List[Recipe]:
        params = {}
        if search:
            params["search"] = search
        if tags:
            params["tags"] = ",".join(tags)
        data = await self.client.get(RECIPES, params=params or None)
        return [Recipe.from_dict(r) for r in data or []]

    async def get_by_id(self, recipe_id: str) -> Recipe:
        return Recipe.from_dict(await self.client.get(f"{RECIPES}/{recipe_id}"))

    async def create(self, recipe: Recipe) -> Recipe:
        body = recipe.to_dict()
        body.pop("_id", None)
        return Recipe.from_dict(await self.client.post(RECIPES, json=body))

    async def update(self, recipe_id: str, changes: dict) -> Recipe:
        return Recipe.from_dict(await self.client.put(f"{RECIPES}/{recipe_id}", json=changes))

    async def delete(self, recipe_id: str) -> None:
        await self.client.delete(f"{RECIPES}/{recipe_id}")
