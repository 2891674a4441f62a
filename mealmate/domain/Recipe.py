"""Recipe domain entity: a snapshot of a backend recipe (title, image, dietary flag, complexity)."""
from typing import List, Optional


class Recipe:
    def __init__(self, id: str = "", title: str = "", image_url: Optional[str] = None,
                 source_url: Optional[str] = None, tags: Optional[List[str]] = None,
                 is_vegetarian: bool = False, complexity: Optional[str] = None,
                 prep_time: Optional[int] = None, cook_time: Optional[int] = None,
                 servings: Optional[int] = None, last_used_date: Optional[str] = None,
                 plan_count: int = 0):
        self.id = id
        self.title = title
        self.image_url = image_url
        self.source_url = source_url
        self.tags = tags[:] if tags else []
        self.is_vegetarian = is_vegetarian
        self.complexity = complexity
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.servings = servings
        self.last_used_date = last_used_date
        self.plan_count = plan_count

    def __str__(self) -> str:
        extras = []
        if self.is_vegetarian:
            extras.append("vegetarian")
        if self.complexity:
            extras.append(self.complexity)
        return f"{self.title} ({', '.join(extras)})" if extras else self.title

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or any tag."""
        q = query.strip().lower()
        if not q:
            return True
        return q in self.title.lower() or any(q in tag.lower() for tag in self.tags)

    @staticmethod
    def from_dict(data):
        d = data or {}
        return Recipe(
            id=d.get("_id", ""),
            title=d.get("title", ""),
            image_url=d.get("imageUrl"),
            source_url=d.get("sourceUrl"),
            tags=d.get("tags", []),
            is_vegetarian=bool(d.get("isVegetarian", False)),
            complexity=d.get("complexity"),
            prep_time=d.get("prepTime"),
            cook_time=d.get("cookTime"),
            servings=d.get("servings"),
            last_used_date=d.get("lastUsedDate"),
            plan_count=d.get("planCount", 0) or 0,
        )

    def to_dict(self):
        data = {
            "_id": self.id,
            "title": self.title,
            "tags": self.tags,
            "isVegetarian": self.is_vegetarian,
        }
        optional = {
            "imageUrl": self.image_url,
            "sourceUrl": self.source_url,
            "complexity": self.complexity,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "lastUsedDate": self.last_used_date,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.plan_count:
            data["planCount"] = self.plan_count
        return data
