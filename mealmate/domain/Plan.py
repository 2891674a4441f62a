"""Plan domain entity: the server's persisted single-day assignment (date, recipe or label, confirmation)."""
from typing import Optional

from mealmate.domain.Recipe import Recipe
from mealmate.utilities.constants import NO_MEAL_PLANNED


class Plan:
    def __init__(self, id: str, date: str, recipe_id: Optional[str] = None,
                 recipe: Optional[Recipe] = None, label: Optional[str] = None,
                 is_confirmed: bool = False):
        self.id = id
        self.date = date
        self.recipe_id = recipe_id if recipe_id is not None else (recipe.id if recipe else None)
        self.recipe = recipe
        self.label = label
        self.is_confirmed = is_confirmed

    def __repr__(self) -> str:
        return f"Plan({self.date}: {self.title_or_label()})"

    def has_recipe(self) -> bool:
        return bool(self.recipe_id)

    def is_planned(self) -> bool:
        """A day counts as planned once it carries a recipe or a label."""
        return bool(self.recipe_id or self.label)

    def title_or_label(self) -> str:
        if self.recipe is not None and self.recipe.title:
            return self.recipe.title
        return self.label or NO_MEAL_PLANNED

    @staticmethod
    def from_dict(data):
        # recipeId arrives either populated (a recipe object) or as a raw id
        raw = data.get("recipeId")
        recipe = Recipe.from_dict(raw) if isinstance(raw, dict) else None
        recipe_id = recipe.id if recipe else (raw or None)
        return Plan(
            id=data.get("_id", ""),
            date=data["date"],
            recipe_id=recipe_id,
            recipe=recipe,
            label=data.get("label") or None,
            is_confirmed=bool(data.get("isConfirmed", False)),
        )

    def to_dict(self):
        data = {"_id": self.id, "date": self.date, "isConfirmed": self.is_confirmed}
        if self.recipe is not None:
            data["recipeId"] = self.recipe.to_dict()
        elif self.recipe_id:
            data["recipeId"] = self.recipe_id
        if self.label:
            data["label"] = self.label
        return data
