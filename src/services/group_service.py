"""Group formation, joining and seat allocation."""
import logging
from typing import List, Optional, Sequence, Tuple

from src.models.event import Event
from src.models.group import Group
from src.models.person import Person
from src.models.ticket import Ticket
from src.services.repository import GroupRepository
from src.utils.exceptions import (
    DiversityGroupsError,
    DuplicateMemberError,
    EventNotFoundError,
    GroupFullError,
    GroupNotFoundError,
    InvalidInputError,
    UserNotFoundError,
)
from src.utils.settings import get_seat_settings
from src.utils.validation import validate_identifier

logger = logging.getLogger(__name__)


def create_group(
    event_id: str,
    name: str,
    initial_members: Sequence[Person],
    max_members: int,
    group_id: Optional[str] = None,
) -> Group:
    """
    Create a group with its derived score and discount.

    Args:
        event_id: Event the group is buying tickets for
        name: Display name
        initial_members: Members in join order (may be empty)
        max_members: Capacity, must be positive
        group_id: Optional explicit ID (a UUID is generated otherwise)

    Returns:
        Group with diversity_score, discount_rate and is_complete set

    Raises:
        InvalidInputError: If an ID, the name or max_members is invalid
        DuplicateMemberError: If a person appears twice in initial_members
        CapacityExceededError: If initial_members exceeds max_members
    """
    kwargs = {}
    if group_id is not None:
        kwargs["id"] = group_id

    return Group(
        event_id=event_id,
        name=name,
        members=list(initial_members),
        max_members=max_members,
        **kwargs,
    )


def join_group(group: Group, person: Person) -> Group:
    """
    Add a person to a group.

    The group is checked before it is touched, so a failed join leaves it
    exactly as it was.

    Returns:
        The same group, with derived fields recomputed

    Raises:
        GroupFullError: If the group has no spots left
        DuplicateMemberError: If the person already joined
    """
    if group.is_full():
        raise GroupFullError(f"Group {group.id} is full ({group.max_members} members)")

    if group.has_member(person.id):
        raise DuplicateMemberError(f"Person {person.id} already joined group {group.id}")

    group.add_member(person)
    return group


def available_spots(group: Group) -> int:
    """Spots left in the group; never negative."""
    return group.available_spots()


def _seat_label(row: str, seat: int) -> str:
    return f"Row {row}, Seat {seat}"


def generate_seat_assignments(
    group: Group,
    event: Event,
    seat_base: Optional[int] = None,
    row: Optional[str] = None,
    section: Optional[str] = None,
    members: Optional[Sequence[Person]] = None,
    first_seat_offset: int = 0,
) -> List[Ticket]:
    """
    Allocate adjacent seats for group members.

    Args:
        group: Group whose discount applies
        event: Event the tickets are for (must match group.event_id)
        seat_base: First seat number (defaults to SEAT_BASE setting)
        row: Row label (defaults to SEAT_ROW setting)
        section: Section for the whole group (defaults to SEAT_SECTION setting)
        members: Subset of members to seat (defaults to all, in join order)
        first_seat_offset: Seats already taken from seat_base onwards

    Returns:
        One ticket per member, seats numbered sequentially

    Raises:
        InvalidInputError: If the event is not the group's event
    """
    if event.id != group.event_id:
        raise InvalidInputError(
            f"Event {event.id} does not match group event {group.event_id}"
        )

    if seat_base is None or row is None or section is None:
        settings = get_seat_settings()
        seat_base = settings.base if seat_base is None else seat_base
        row = settings.row if row is None else row
        section = settings.section if section is None else section

    to_seat = group.members if members is None else members

    tickets = []
    for index, member in enumerate(to_seat):
        tickets.append(Ticket.issue(
            group_id=group.id,
            user_id=member.id,
            user_name=member.display_name,
            event_id=event.id,
            event_title=event.title,
            event_date=event.date,
            seat_number=_seat_label(row, seat_base + first_seat_offset + index),
            section=section,
            price=event.price,
            discount_rate=group.discount_rate,
        ))

    return tickets


class GroupService:
    """Group operations applied through a repository."""

    def __init__(self, repository: GroupRepository) -> None:
        self._repository = repository

    def _require_group(self, group_id: str) -> Group:
        group = self._repository.get_group(group_id)
        if group is None:
            raise GroupNotFoundError(f"Group not found: {group_id}")
        return group

    def _require_event(self, event_id: str) -> Event:
        event = self._repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(f"Event not found: {event_id}")
        return event

    def _require_user(self, user_id: str) -> Person:
        user = self._repository.get_user(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return user

    def get_group(self, group_id: str) -> Group:
        """
        Raises:
            GroupNotFoundError: If the group does not exist
        """
        return self._require_group(group_id)

    def list_event_groups(self, event_id: str) -> List[Group]:
        """Groups for an event, in creation order."""
        return self._repository.list_groups(event_id)

    def create_group(
        self,
        event_id: str,
        name: str,
        member_ids: Sequence[str],
        max_members: int,
        group_id: Optional[str] = None,
    ) -> Group:
        """
        Create and save a group from user IDs.

        Raises:
            EventNotFoundError: If the event does not exist
            UserNotFoundError: If a member ID is unknown
            InvalidInputError, DuplicateMemberError, CapacityExceededError:
                see create_group()
        """
        validate_identifier(event_id, "Event ID")
        self._require_event(event_id)
        members = [self._require_user(user_id) for user_id in member_ids]

        group = create_group(event_id, name, members, max_members, group_id=group_id)

        with self._repository.lock_group(group.id):
            if self._repository.get_group(group.id) is not None:
                raise InvalidInputError(f"Group already exists: {group.id}")
            self._repository.save_group(group)

        logger.info(
            f"Created group {group.id} for event {event_id} with "
            f"{len(group.members)}/{group.max_members} members (score {group.diversity_score})"
        )
        return group

    def join_group(self, group_id: str, user_id: str) -> Group:
        """
        Add a user to a stored group.

        The capacity check and the append happen under the group lock on a
        freshly loaded copy, so concurrent joins cannot overfill a group.

        Raises:
            GroupNotFoundError: If the group does not exist
            UserNotFoundError: If the user does not exist
            GroupFullError: If the group has no spots left
            DuplicateMemberError: If the user already joined
        """
        user = self._require_user(user_id)

        with self._repository.lock_group(group_id):
            group = self._require_group(group_id)
            join_group(group, user)
            self._repository.save_group(group)

        logger.info(
            f"User {user_id} joined group {group_id} "
            f"({len(group.members)}/{group.max_members}, score {group.diversity_score})"
        )
        return group

    def try_join_group(self, group_id: str, user_id: str) -> Tuple[bool, str]:
        """
        Join a group, reporting the outcome as a message.

        Returns:
            Tuple of (success: bool, message: str)
            - (True, "Joined <group name>") on success
            - (False, "Group not found") / (False, "User not found")
            - (False, "Group is full") if no spots are left
            - (False, "Already a member") if the user already joined
        """
        try:
            group = self.join_group(group_id, user_id)
        except GroupNotFoundError:
            return False, "Group not found"
        except UserNotFoundError:
            return False, "User not found"
        except GroupFullError:
            logger.warning(f"Join rejected, group {group_id} is full")
            return False, "Group is full"
        except DuplicateMemberError:
            return False, "Already a member"
        except DiversityGroupsError as e:
            logger.error(f"Join failed for group {group_id}: {e}")
            return False, "Unable to join group"

        return True, f"Joined {group.name}"

    def available_spots(self, group_id: str) -> int:
        return available_spots(self._require_group(group_id))

    def get_group_tickets(self, group_id: str) -> List[Ticket]:
        """Tickets already issued for a group."""
        group = self._require_group(group_id)
        return self._repository.get_tickets(group.id, group.event_id)

    def issue_group_tickets(self, group_id: str) -> List[Ticket]:
        """
        Issue tickets for every group member, at most once per member.

        Tickets are keyed by (group ID, event ID). Members who already hold
        a ticket keep it; members who joined later get the next seats.

        Returns:
            All tickets for the group, in seat order

        Raises:
            GroupNotFoundError: If the group does not exist
            EventNotFoundError: If the group's event does not exist
        """
        with self._repository.lock_group(group_id):
            group = self._require_group(group_id)
            event = self._require_event(group.event_id)

            existing = self._repository.get_tickets(group.id, event.id)
            ticketed = {ticket.user_id for ticket in existing}
            pending = [member for member in group.members if member.id not in ticketed]

            if not pending:
                return existing

            new_tickets = generate_seat_assignments(
                group, event, members=pending, first_seat_offset=len(existing)
            )
            tickets = existing + new_tickets
            self._repository.save_tickets(group.id, event.id, tickets)

        logger.info(
            f"Issued {len(new_tickets)} tickets for group {group_id} "
            f"at {group.discount_percentage()} discount"
        )
        return tickets
