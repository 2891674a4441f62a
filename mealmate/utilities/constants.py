from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
WEEK_LENGTH: Final[int] = 7

# 0=Monday .. 6=Sunday
ALL_DAYS: Final[tuple[int, ...]] = (0, 1, 2, 3, 4, 5, 6)
DAY_NAMES: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
SHORT_DAY_NAMES: Final[tuple[str, ...]] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

LABEL_EATING_OUT: Final[str] = "Eating Out"
LABEL_TBD: Final[str] = "TBD"
NO_MEAL_PLANNED: Final[str] = "No meal planned"

COMPLEXITY_LEVELS: Final[tuple[str, ...]] = ("simple", "medium", "complex")
HOUSEHOLD_ROLES: Final[tuple[str, ...]] = ("admin", "member")

STORE_CATEGORIES: Final[tuple[str, ...]] = (
    "Produce", "Meat & Seafood", "Dairy & Eggs", "Pantry",
    "Frozen", "Bakery", "Household", "Other",
)
DEFAULT_CATEGORY: Final[str] = "Other"
GROCERY_LIST_STATUSES: Final[tuple[str, ...]] = ("active", "archived")

ENDPOINTS: Final[dict[str, str]] = {
    "recipes": "/api/recipes",
    "plans": "/api/plans",
    "suggestions": "/api/suggestions",
    "auth": "/api/auth",
    "household": "/api/household",
    "submissions": "/api/submissions",
    "stores": "/api/stores",
    "grocery_lists": "/api/grocery-lists",
    "staples": "/api/staples",
    "health": "/health",
}

SHARE_TITLE: Final[str] = "This Week's Dinners"
SHARE_FOOTER: Final[str] = "Planned with Meal Mate"
