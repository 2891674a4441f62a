"""User domain entity: the signed-in account as cached on the device."""
from typing import Optional


class User:
    def __init__(self, id: str, email: str, name: str, role: str = "member",
                 household_id: Optional[str] = None, profile_picture: Optional[str] = None,
                 auth_provider: Optional[str] = None):
        self.id = id
        self.email = email
        self.name = name
        self.role = role
        self.household_id = household_id
        self.profile_picture = profile_picture
        self.auth_provider = auth_provider

    def __repr__(self) -> str:
        return f"User({self.email}, role={self.role})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def in_household(self) -> bool:
        return bool(self.household_id)

    @staticmethod
    def from_dict(data):
        return User(
            id=data.get("id") or data.get("_id", ""),
            email=data.get("email", ""),
            name=data.get("name", ""),
            role=data.get("role", "member"),
            household_id=data.get("householdId"),
            profile_picture=data.get("profilePicture"),
            auth_provider=data.get("authProvider"),
        )

    def to_dict(self):
        data = {"id": self.id, "email": self.email, "name": self.name, "role": self.role}
        for key, value in (("householdId", self.household_id),
                           ("profilePicture", self.profile_picture),
                           ("authProvider", self.auth_provider)):
            if value:
                data[key] = value
        return data
