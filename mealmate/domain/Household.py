"""Household domain entities: the shared household, its members and their recipe submissions."""
from typing import List, Optional


class HouseholdMember:
    def __init__(self, id: str, name: str, email: str, role: str = "member",
                 profile_picture: Optional[str] = None):
        self.id = id
        self.name = name
        self.email = email
        self.role = role
        self.profile_picture = profile_picture

    def __repr__(self) -> str:
        return f"HouseholdMember({self.name}, {self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @staticmethod
    def from_dict(data):
        return HouseholdMember(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=data.get("role", "member"),
            profile_picture=data.get("profilePicture"),
        )


class Household:
    def __init__(self, id: str, name: str, members: Optional[List[HouseholdMember]] = None):
        self.id = id
        self.name = name
        self.members = members[:] if members else []

    def __repr__(self) -> str:
        return f"Household({self.name}, {len(self.members)} members)"

    def admins(self) -> List[HouseholdMember]:
        return [m for m in self.members if m.is_admin]

    @staticmethod
    def from_dict(data):
        return Household(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            members=[HouseholdMember.from_dict(m) for m in data.get("members", [])],
        )


class RecipeSubmission:
    def __init__(self, id: str, recipe_url: str, status: str = "pending",
                 submitted_by: Optional[HouseholdMember] = None,
                 reviewed_by: Optional[HouseholdMember] = None,
                 review_notes: Optional[str] = None):
        self.id = id
        self.recipe_url = recipe_url
        self.status = status
        self.submitted_by = submitted_by
        self.reviewed_by = reviewed_by
        self.review_notes = review_notes

    def __repr__(self) -> str:
        return f"RecipeSubmission({self.recipe_url}, {self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    @staticmethod
    def from_dict(data):
        submitted = data.get("submittedBy")
        reviewed = data.get("reviewedBy")
        return RecipeSubmission(
            id=data.get("_id", ""),
            recipe_url=data.get("recipeUrl", ""),
            status=data.get("status", "pending"),
            submitted_by=HouseholdMember.from_dict(submitted) if isinstance(submitted, dict) else None,
            reviewed_by=HouseholdMember.from_dict(reviewed) if isinstance(reviewed, dict) else None,
            review_notes=data.get("reviewNotes"),
        )
