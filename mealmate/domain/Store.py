"""Store domain entity: a grocery store and the order its aisles (categories) are walked in."""
from typing import List, Optional

from mealmate.utilities.constants import STORE_CATEGORIES


class Store:
    def __init__(self, id: str, name: str, category_order: Optional[List[str]] = None,
                 is_default: bool = False, image_url: Optional[str] = None):
        self.id = id
        self.name = name
        self.category_order = list(category_order) if category_order else list(STORE_CATEGORIES)
        self.is_default = is_default
        self.image_url = image_url

    def __repr__(self) -> str:
        return f"Store({self.name}: {' > '.join(self.category_order)})"

    def replace(self, **changes) -> "Store":
        """Return a new Store with ``changes`` applied; this one is left intact."""
        fields = {
            "id": self.id,
            "name": self.name,
            "category_order": list(self.category_order),
            "is_default": self.is_default,
            "image_url": self.image_url,
        }
        fields.update(changes)
        return Store(**fields)

    @staticmethod
    def from_dict(data):
        return Store(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            category_order=data.get("categoryOrder"),
            is_default=bool(data.get("isDefault", False)),
            image_url=data.get("imageUrl"),
        )

    def to_dict(self):
        data = {
            "_id": self.id,
            "name": self.name,
            "categoryOrder": list(self.category_order),
            "isDefault": self.is_default,
        }
        if self.image_url:
            data["imageUrl"] = self.image_url
        return data
