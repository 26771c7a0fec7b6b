"""Attendee list editing for the ticket purchase flow.

Each function returns a new list and leaves its input alone. Out of range
indexes are ignored rather than raised, matching how the purchase form
treats stale row indexes.
"""
from typing import List, Sequence

from src.models.person import Person


def new_attendee_list(self_name: str = "You") -> List[Person]:
    """Start a purchase with the purchaser as the only attendee."""
    return [Person(name=self_name)]


def add_attendee(attendees: Sequence[Person]) -> List[Person]:
    """Append a blank attendee."""
    return list(attendees) + [Person()]


def remove_attendee(attendees: Sequence[Person], index: int, keep_first: bool = False) -> List[Person]:
    """
    Remove the attendee at index.

    Args:
        attendees: Current attendee list
        index: Position to remove
        keep_first: If True, index 0 (the purchaser) is never removed

    Returns:
        New list; unchanged copy if index is out of range, protected,
        or the list is down to its last entry
    """
    updated = list(attendees)
    lowest = 1 if keep_first else 0
    if len(updated) <= 1 or index < lowest or index >= len(updated):
        return updated

    del updated[index]
    return updated


def update_attendee(attendees: Sequence[Person], index: int, person: Person) -> List[Person]:
    """Replace the attendee at index; unchanged copy if out of range."""
    updated = list(attendees)
    if index < 0 or index >= len(updated):
        return updated

    updated[index] = person
    return updated
