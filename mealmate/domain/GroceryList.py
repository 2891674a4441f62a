"""GroceryList domain entity: the items to buy for the dinners planned over a date range."""
from typing import List, Optional

from mealmate.utilities.constants import DEFAULT_CATEGORY


class GroceryItem:
    def __init__(self, name: str, quantity: str = "", category: str = DEFAULT_CATEGORY,
                 recipe_ids: Optional[List[str]] = None, recipe_names: Optional[List[str]] = None,
                 is_checked: bool = False, original_texts: Optional[List[str]] = None):
        self.name = name
        self.quantity = quantity
        self.category = category
        self.recipe_ids = recipe_ids[:] if recipe_ids else []
        self.recipe_names = recipe_names[:] if recipe_names else []
        self.is_checked = is_checked
        self.original_texts = original_texts[:] if original_texts else []

    def __repr__(self) -> str:
        return f"GroceryItem({self.name}, checked={self.is_checked})"

    def replace(self, **changes) -> "GroceryItem":
        fields = {
            "name": self.name,
            "quantity": self.quantity,
            "category": self.category,
            "recipe_ids": self.recipe_ids,
            "recipe_names": self.recipe_names,
            "is_checked": self.is_checked,
            "original_texts": self.original_texts,
        }
        fields.update(changes)
        return GroceryItem(**fields)

    @staticmethod
    def from_dict(data):
        return GroceryItem(
            name=data.get("name", ""),
            quantity=data.get("quantity") or "",
            category=data.get("category") or DEFAULT_CATEGORY,
            recipe_ids=[str(r) for r in data.get("recipeIds", [])],
            recipe_names=data.get("recipeNames", []),
            is_checked=bool(data.get("isChecked", False)),
            original_texts=data.get("originalTexts", []),
        )


class GroceryList:
    """Items are addressed by their position; the server edits them by index."""

    def __init__(self, id: str, name: str, start_date: str, end_date: str, status: str = "active",
                 items: Optional[List[GroceryItem]] = None, created_at: Optional[str] = None):
        self.id = id
        self.name = name
        self.start_date = start_date
        self.end_date = end_date
        self.status = status
        self.items = items[:] if items else []
        self.created_at = created_at

    def __repr__(self) -> str:
        return f"GroceryList({self.name}, {self.checked_count}/{len(self.items)} checked)"

    @property
    def is_archived(self) -> bool:
        return self.status == "archived"

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.is_checked)

    @property
    def progress(self) -> float:
        """Share of items checked off, 0.0 for an empty list."""
        return self.checked_count / len(self.items) if self.items else 0.0

    @property
    def is_complete(self) -> bool:
        return bool(self.items) and all(item.is_checked for item in self.items)

    def replace(self, **changes) -> "GroceryList":
        fields = {
            "id": self.id,
            "name": self.name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "status": self.status,
            "items": self.items,
            "created_at": self.created_at,
        }
        fields.update(changes)
        return GroceryList(**fields)

    def with_item(self, index: int, item: GroceryItem) -> "GroceryList":
        items = list(self.items)
        items[index] = item
        return self.replace(items=items)

    @staticmethod
    def from_dict(data):
        return GroceryList(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            start_date=data.get("startDate", ""),
            end_date=data.get("endDate", ""),
            status=data.get("status", "active"),
            items=[GroceryItem.from_dict(i) for i in data.get("items", [])],
            created_at=data.get("createdAt"),
        )
