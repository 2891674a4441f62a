"""Read-only summary of an approved week and its shareable text."""
from typing import List

from mealmate.domain.Plan import Plan
from mealmate.utilities.constants import SHARE_FOOTER, SHARE_TITLE
from mealmate.utilities.dateutils import format_date_string


class ApprovalResult:
    def __init__(self, plans: List[Plan], message: str = ""):
        self.plans = list(plans)
        self.message = message

    def meal_count(self) -> int:
        return sum(1 for p in self.plans if p.has_recipe())

    @staticmethod
    def format_day(date_str: str) -> str:
        return format_date_string(date_str, weekday="short", month="short")

    def lines(self) -> List[str]:
        return [f"{self.format_day(p.date)}: {p.title_or_label()}" for p in self.plans]

    def digest(self) -> str:
        return "\n".join(self.lines())

    def share_message(self) -> str:
        return f"{SHARE_TITLE}\n\n{self.digest()}\n\n{SHARE_FOOTER}"
