import unittest

from mealmate.domain.Plan import Plan
from mealmate.domain.Recipe import Recipe
from mealmate.logic.planning.approval import ApprovalResult


class TestApprovalResult(unittest.TestCase):

    def setUp(self):
        self.result = ApprovalResult([
            Plan("p1", "2024-06-10", recipe=Recipe(id="r1", title="Spaghetti Bolognese"), is_confirmed=True),
            Plan("p2", "2024-06-11", label="Eating Out", is_confirmed=True),
            Plan("p3", "2024-06-12", is_confirmed=True),
            Plan("p4", "2024-06-13", recipe=Recipe(id="r2", title="Veggie Curry"), is_confirmed=True),
        ], message="Approved 4 meals")

    def test_meal_count_only_counts_recipes(self):
        self.assertEqual(self.result.meal_count(), 2)

    def test_lines(self):
        self.assertEqual(self.result.lines(), [
            "Mon, Jun 10: Spaghetti Bolognese",
            "Tue, Jun 11: Eating Out",
            "Wed, Jun 12: No meal planned",
            "Thu, Jun 13: Veggie Curry",
        ])

    def test_share_message(self):
        self.assertEqual(
            self.result.share_message(),
            "This Week's Dinners\n\n"
            "Mon, Jun 10: Spaghetti Bolognese\n"
            "Tue, Jun 11: Eating Out\n"
            "Wed, Jun 12: No meal planned\n"
            "Thu, Jun 13: Veggie Curry\n\n"
            "Planned with Meal Mate",
        )

    def test_plans_are_copied(self):
        plans = [Plan("p1", "2024-06-10", label="TBD")]
        result = ApprovalResult(plans)
        plans.clear()
        self.assertEqual(len(result.plans), 1)
        self.assertEqual(result.meal_count(), 0)
