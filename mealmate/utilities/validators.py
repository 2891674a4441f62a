"""
Request validation schemas using Pydantic.

Field names are snake_case in Python and camelCase on the wire; dump with
``to_payload()`` to get the body the backend expects.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from mealmate.utilities.constants import GROCERY_LIST_STATUSES, STORE_CATEGORIES
from mealmate.utilities.dateutils import parse_date


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def _check_date(v: str) -> str:
    parse_date(v)
    return v


class SuggestionConstraintsInput(_Payload):
    """Schema for the week-generation request."""
    start_date: str = Field(..., alias="startDate")
    days_to_skip: List[int] = Field(default_factory=list, alias="daysToSkip")
    avoid_repeats: bool = Field(False, alias="avoidRepeats")
    prefer_simple: bool = Field(False, alias="preferSimple")
    vegetarian_only: bool = Field(False, alias="vegetarianOnly")

    @field_validator('start_date')
    @classmethod
    def validate_start_date(cls, v):
        return _check_date(v)

    @field_validator('days_to_skip')
    @classmethod
    def validate_days_to_skip(cls, v):
        """Days are 0=Monday..6=Sunday, each listed once."""
        if any(d < 0 or d > 6 for d in v):
            raise ValueError('daysToSkip values must be between 0 (Monday) and 6 (Sunday)')
        if len(set(v)) != len(v):
            raise ValueError('daysToSkip must not contain duplicates')
        return sorted(v)

    def filters(self) -> dict:
        """The subset of constraints the alternative endpoint accepts."""
        return {
            "avoid_repeats": self.avoid_repeats,
            "prefer_simple": self.prefer_simple,
            "vegetarian_only": self.vegetarian_only,
        }


class AlternativeRequestInput(_Payload):
    """Schema for a single-day alternative request."""
    date: str
    exclude_recipe_ids: List[str] = Field(default_factory=list, alias="excludeRecipeIds")
    avoid_repeats: bool = Field(False, alias="avoidRepeats")
    prefer_simple: bool = Field(False, alias="preferSimple")
    vegetarian_only: bool = Field(False, alias="vegetarianOnly")

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        return _check_date(v)


class PlanUpdateInput(_Payload):
    """Schema for ``PUT plans/:date``; omitted fields are left untouched."""
    recipe_id: Optional[str] = Field(None, alias="recipeId")
    label: Optional[str] = None
    is_confirmed: Optional[bool] = Field(None, alias="isConfirmed")


class LoginInput(_Payload):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        v = v.strip().lower()
        if '@' not in v:
            raise ValueError('Please enter a valid email address')
        return v


class SignupInput(LoginInput):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class CreateHouseholdInput(_Payload):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Remove leading/trailing whitespace."""
        if not v.strip():
            raise ValueError('Please enter a household name')
        return v.strip()


class JoinHouseholdInput(_Payload):
    token: str = Field(..., min_length=1)


class SubmitRecipeInput(_Payload):
    recipe_url: str = Field(..., alias="recipeUrl", min_length=1)

    @field_validator('recipe_url')
    @classmethod
    def validate_url(cls, v):
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError('Recipe URL must start with http:// or https://')
        return v


class ReviewSubmissionInput(_Payload):
    action: str = Field(..., pattern=r'^(approve|deny)$')
    review_notes: Optional[str] = Field(None, alias="reviewNotes")


class StoreUpdateInput(_Payload):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category_order: Optional[List[str]] = Field(None, alias="categoryOrder")
    is_default: Optional[bool] = Field(None, alias="isDefault")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    @field_validator('category_order')
    @classmethod
    def validate_category_order(cls, v):
        """A category order is a permutation: each label appears once."""
        if v is not None and len(set(v)) != len(v):
            raise ValueError('categoryOrder must not repeat a category')
        return v


def _check_category(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in STORE_CATEGORIES:
        raise ValueError(f'category must be one of: {", ".join(STORE_CATEGORIES)}')
    return v


class CreateGroceryListInput(_Payload):
    """Schema for building a grocery list from the plans in a date range (both ends included)."""
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('start_date', 'end_date')
    @classmethod
    def validate_dates(cls, v):
        return _check_date(v)

    @field_validator('end_date')
    @classmethod
    def validate_range(cls, v, info):
        start = info.data.get('start_date')
        if start is not None and v < start:
            raise ValueError('End date must be on or after start date')
        return v


class GroceryListUpdateInput(_Payload):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = None

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in GROCERY_LIST_STATUSES:
            raise ValueError(f'status must be one of: {", ".join(GROCERY_LIST_STATUSES)}')
        return v


class GroceryItemUpdateInput(_Payload):
    is_checked: Optional[bool] = Field(None, alias="isChecked")
    quantity: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)


class GroceryItemInput(_Payload):
    """Schema for a hand-added list item or a staple."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Optional[str] = None
    category: Optional[str] = None
    save_to_staples: Optional[bool] = Field(None, alias="saveToStaples")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Item name is required')
        return v.strip()

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)


class AddStaplesInput(_Payload):
    staple_ids: List[str] = Field(..., alias="stapleIds", min_length=1)
