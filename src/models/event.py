"""Event data model."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.utils.exceptions import InvalidInputError
from src.utils.validation import validate_event_data, validate_identifier


@dataclass
class Event:
    """Ticketed event that groups are formed for."""

    id: str
    title: str
    date: str  # ISO 8601 format
    price_cents: int
    category: str = ""
    state: str = ""
    city: str = ""
    venue: Optional[str] = None
    sponsored: bool = False

    def __post_init__(self):
        """Validate event data after initialization."""
        validate_identifier(self.id, "Event ID")

        if not self.title or not self.title.strip():
            raise InvalidInputError("Event title cannot be empty")

        if self.price_cents < 0:
            raise InvalidInputError("Price cannot be negative")

    @property
    def price(self) -> float:
        """Ticket price in dollars."""
        return self.price_cents / 100.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        validate_event_data(data)
        return cls(
            id=data["id"],
            title=data["title"],
            date=data["date"],
            price_cents=data["priceCents"],
            category=data.get("category", ""),
            state=data.get("state", ""),
            city=data.get("city", ""),
            venue=data.get("venue"),
            sponsored=data.get("sponsored", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "priceCents": self.price_cents,
            "category": self.category,
            "state": self.state,
            "city": self.city,
            "venue": self.venue,
            "sponsored": self.sponsored,
        }
