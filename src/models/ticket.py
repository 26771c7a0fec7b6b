"""Ticket data model."""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Ticket:
    """Seat allocated to one group member."""

    group_id: str
    user_id: str
    user_name: str
    event_id: str
    event_title: str
    event_date: str
    seat_number: str
    section: str
    price: float
    discount_applied: float
    final_price: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def issue(
        cls,
        group_id: str,
        user_id: str,
        user_name: str,
        event_id: str,
        event_title: str,
        event_date: str,
        seat_number: str,
        section: str,
        price: float,
        discount_rate: float,
    ) -> "Ticket":
        """Create a ticket, applying the group discount to the price."""
        discount_applied = price * discount_rate
        return cls(
            group_id=group_id,
            user_id=user_id,
            user_name=user_name,
            event_id=event_id,
            event_title=event_title,
            event_date=event_date,
            seat_number=seat_number,
            section=section,
            price=price,
            discount_applied=discount_applied,
            final_price=price - discount_applied,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "eventId": self.event_id,
            "eventTitle": self.event_title,
            "eventDate": self.event_date,
            "seatNumber": self.seat_number,
            "section": self.section,
            "price": self.price,
            "discountApplied": self.discount_applied,
            "finalPrice": self.final_price,
        }
