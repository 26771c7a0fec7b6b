"""Person data model for attendees and group members."""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.utils.validation import validate_age, validate_identifier, validate_person_data


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Person:
    """Attendee or group member with optional demographic details."""

    id: str = field(default_factory=_new_id)
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    country_of_birth: Optional[str] = None
    language_at_home: Optional[str] = None
    state: Optional[str] = None
    is_first_nations: bool = False
    has_disability: bool = False
    email: Optional[str] = None
    phone: Optional[str] = None

    def __post_init__(self):
        """Validate person data."""
        validate_identifier(self.id, "Person ID")
        validate_age(self.age)

    @property
    def display_name(self) -> str:
        """Name for tickets and lists; falls back to 'Guest'."""
        if self.name and self.name.strip():
            return self.name.strip()
        return "Guest"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        """
        Build a Person from its JSON mapping.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            Person instance

        Raises:
            InvalidInputError: If the data fails validation
        """
        validate_person_data(data)
        kwargs = dict(
            name=data.get("name"),
            age=data.get("age"),
            gender=data.get("gender"),
            country_of_birth=data.get("countryOfBirth"),
            language_at_home=data.get("languageAtHome"),
            state=data.get("state"),
            is_first_nations=data.get("isFirstNations", False),
            has_disability=data.get("hasDisability", False),
            email=data.get("email"),
            phone=data.get("phone"),
        )
        if "id" in data:
            kwargs["id"] = data["id"]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON mapping (camelCase keys)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "age": self.age,
            "gender": self.gender,
            "countryOfBirth": self.country_of_birth,
            "languageAtHome": self.language_at_home,
            "state": self.state,
            "isFirstNations": self.is_first_nations,
            "hasDisability": self.has_disability,
        }
