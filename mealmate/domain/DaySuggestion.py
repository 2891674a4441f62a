"""DaySuggestion domain entity: one day of a weekly suggestion set, prior to approval.

A day is displayed in exactly one of three states: skipped, showing a
recipe, or empty (nothing suitable was found). ``recipe_id`` and ``recipe``
always change together through ``with_recipe``.
"""
from typing import Optional

from mealmate.domain.Recipe import Recipe
from mealmate.utilities.constants import DAY_NAMES
from mealmate.utilities.dateutils import parse_date

STATE_SKIPPED = "skipped"
STATE_RECIPE = "recipe"
STATE_EMPTY = "empty"


class DaySuggestion:
    def __init__(self, date: str, is_skipped: bool = False, recipe_id: Optional[str] = None,
                 recipe: Optional[Recipe] = None, label: Optional[str] = None,
                 day_name: Optional[str] = None, day_of_week: Optional[int] = None):
        self.date = date
        self.is_skipped = is_skipped
        self.recipe_id = recipe_id if recipe_id is not None else (recipe.id if recipe else None)
        self.recipe = recipe
        self.label = label
        weekday = parse_date(date).weekday()
        self.day_name = day_name or DAY_NAMES[weekday]
        # 0=Monday, same numbering as daysToSkip
        self.day_of_week = day_of_week if day_of_week is not None else weekday

    def __repr__(self) -> str:
        return f"DaySuggestion({self.date}, {self.display_state()}, recipe_id={self.recipe_id!r})"

    def display_state(self) -> str:
        if self.is_skipped:
            return STATE_SKIPPED
        if self.recipe is not None:
            return STATE_RECIPE
        return STATE_EMPTY

    def with_recipe(self, recipe: Recipe, recipe_id: Optional[str] = None) -> "DaySuggestion":
        """Return a copy of this day assigned to ``recipe``."""
        return DaySuggestion(
            date=self.date,
            is_skipped=self.is_skipped,
            recipe_id=recipe_id or recipe.id,
            recipe=recipe,
            label=self.label,
            day_name=self.day_name,
            day_of_week=self.day_of_week,
        )

    def copy(self) -> "DaySuggestion":
        return DaySuggestion.from_dict(self.to_dict())

    @staticmethod
    def from_dict(data):
        recipe = Recipe.from_dict(data["recipe"]) if data.get("recipe") else None
        return DaySuggestion(
            date=data["date"],
            is_skipped=bool(data.get("isSkipped", False)),
            recipe_id=data.get("recipeId") or None,
            recipe=recipe,
            label=data.get("label") or None,
            day_name=data.get("dayName"),
            day_of_week=data.get("dayOfWeek"),
        )

    def to_dict(self):
        data = {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "dayName": self.day_name,
            "isSkipped": self.is_skipped,
        }
        if self.recipe_id:
            data["recipeId"] = self.recipe_id
        if self.recipe is not None:
            data["recipe"] = self.recipe.to_dict()
        if self.label:
            data["label"] = self.label
        return data
