from typing import List, Optional

from mealmate.domain.Plan import Plan
from mealmate.infra.api_client import ApiClient
from mealmate.utilities.constants import ENDPOINTS, WEEK_LENGTH
from mealmate.utilities.validators import PlanUpdateInput

PLANS = ENDPOINTS["plans"]


class PlanRepository:
    """Server-owned plans. The client never invents a Plan, it only reflects what the server returns."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_week_plans(self, start_date: str, days: int = WEEK_LENGTH) -> List[Plan]:
        data = await self.client.get(PLANS, params={"start": start_date, "days": days})
        return [Plan.from_dict(p) for p in data or []]

    async def get_by_date(self, date: str) -> Plan:
        return Plan.from_dict(await self.client.get(f"{PLANS}/{date}"))

    async def update_by_date(self, date: str, recipe_id: Optional[str] = None,
                             label: Optional[str] = None,
                             is_confirmed: Optional[bool] = None) -> Plan:
        """Create or update the plan for ``date``; ``None`` fields are not sent."""
        body = PlanUpdateInput(recipe_id=recipe_id, label=label, is_confirmed=is_confirmed)
        return Plan.from_dict(await self.client.put(f"{PLANS}/{date}", json=body.to_payload()))

    async def delete_by_date(self, date: str) -> None:
        await self.client.delete(f"{PLANS}/{date}")

    async def delete_all(self) -> None:
        await self.client.delete(PLANS)
