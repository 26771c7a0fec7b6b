"""Purchase quotes for a list of attendees."""
from dataclasses import dataclass
from typing import Sequence

from src.models.event import Event
from src.models.person import Person
from src.services.diversity_service import (
    compute_diversity_index,
    discount_rate_for_group_size,
    discount_rate_for_score,
)

SCHEME_DIVERSITY = "diversity"
SCHEME_GROUP_SIZE = "group_size"


@dataclass(frozen=True)
class PurchaseQuote:
    """Priced summary of a purchase."""

    attendee_count: int
    unit_price: float
    base_total: float
    discount_rate: float
    discount_amount: float
    final_total: float
    scheme: str


def _build_quote(event: Event, attendee_count: int, rate: float, scheme: str) -> PurchaseQuote:
    base_total = event.price * attendee_count
    discount_amount = base_total * rate
    return PurchaseQuote(
        attendee_count=attendee_count,
        unit_price=event.price,
        base_total=base_total,
        discount_rate=rate,
        discount_amount=discount_amount,
        final_total=base_total - discount_amount,
        scheme=scheme,
    )


def quote_by_diversity(event: Event, attendees: Sequence[Person]) -> PurchaseQuote:
    """Quote using the diversity score tiers."""
    score = compute_diversity_index(attendees)
    return _build_quote(event, len(attendees), discount_rate_for_score(score), SCHEME_DIVERSITY)


def quote_by_group_size(event: Event, attendees: Sequence[Person]) -> PurchaseQuote:
    """Quote using headcount tiers; the purchaser is not counted."""
    other_people = max(0, len(attendees) - 1)
    return _build_quote(event, len(attendees), discount_rate_for_group_size(other_people), SCHEME_GROUP_SIZE)
