"""Staple domain entity: an item bought regularly, added to grocery lists by hand."""
from typing import Optional

from mealmate.utilities.constants import DEFAULT_CATEGORY


class Staple:
    def __init__(self, id: str, name: str, quantity: str = "", category: str = DEFAULT_CATEGORY,
                 usage_count: int = 1, last_used_at: Optional[str] = None):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.category = category
        self.usage_count = usage_count
        self.last_used_at = last_used_at

    def __repr__(self) -> str:
        return f"Staple({self.name}, {self.category}, used {self.usage_count}x)"

    def matches(self, query: str) -> bool:
        return query.strip().lower() in self.name.lower()

    @staticmethod
    def from_dict(data):
        return Staple(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            quantity=data.get("quantity") or "",
            category=data.get("category") or DEFAULT_CATEGORY,
            usage_count=int(data.get("usageCount", 1)),
            last_used_at=data.get("lastUsedAt"),
        )
