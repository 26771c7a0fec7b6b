"""Event group data model."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple

from src.models.person import Person
from src.services.diversity_service import (
    compute_diversity_index,
    discount_description,
    discount_rate_for_group_size,
)
from src.utils.exceptions import CapacityExceededError, DuplicateMemberError, InvalidInputError
from src.utils.validation import find_duplicate_ids, validate_identifier, validate_max_members


def _new_id() -> str:
    return str(uuid.uuid4())


def _now_iso() -> str:
    return datetime.now().astimezone().isoformat()


@dataclass
class Group:
    """Bounded set of people buying tickets to one event together."""

    event_id: str
    name: str
    members: List[Person]
    max_members: int
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_now_iso)  # ISO 8601 format
    diversity_score: int = field(init=False, default=0)
    discount_rate: float = field(init=False, default=0.0)
    is_complete: bool = field(init=False, default=False)

    def __post_init__(self):
        """Validate group data and compute derived fields."""
        validate_identifier(self.id, "Group ID")
        validate_identifier(self.event_id, "Event ID")

        if not self.name or not self.name.strip():
            raise InvalidInputError("Group name cannot be empty")

        validate_max_members(self.max_members)

        self.members = list(self.members)

        duplicates = find_duplicate_ids(self.member_ids())
        if duplicates:
            raise DuplicateMemberError(f"Duplicate members: {', '.join(duplicates)}")

        if len(self.members) > self.max_members:
            raise CapacityExceededError(
                f"Members count ({len(self.members)}) cannot exceed "
                f"max members ({self.max_members})"
            )

        self.refresh()

    def refresh(self) -> None:
        """Recompute score, discount and completion from current members."""
        self.diversity_score = compute_diversity_index(self.members)
        # Groups use the headcount scheme, not the score tiers
        self.discount_rate = discount_rate_for_group_size(len(self.members))
        self.is_complete = len(self.members) >= self.max_members

    def available_spots(self) -> int:
        """Number of people that can still join."""
        return max(0, self.max_members - len(self.members))

    def is_full(self) -> bool:
        """Check if group is at capacity."""
        return len(self.members) >= self.max_members

    def has_member(self, person_id: str) -> bool:
        return any(member.id == person_id for member in self.members)

    def member_ids(self) -> List[str]:
        """Member IDs in join order."""
        return [member.id for member in self.members]

    def discount_percentage(self) -> str:
        """Discount rate as a whole percentage string, e.g. '25%'."""
        return discount_description(self.discount_rate)

    def can_join(self, person: Person) -> Tuple[bool, str]:
        """
        Check if a person can join.

        Returns:
            Tuple of (can_join: bool, error_message: str)
            - (True, "") if joining is allowed
            - (False, "Group is full") if at capacity
            - (False, "Already a member") if the person already joined
        """
        if self.is_full():
            return False, "Group is full"
        if self.has_member(person.id):
            return False, "Already a member"
        return True, ""

    def add_member(self, person: Person) -> None:
        """
        Append a member and recompute derived fields.

        Callers are expected to have checked can_join().
        """
        self.members.append(person)
        self.refresh()
