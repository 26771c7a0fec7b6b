"""Repository interface for groups, events and users.

Services receive a repository in their constructor and never reach for
module-level storage. InMemoryGroupRepository is the default
implementation; anything else only has to honour the same interface.
"""
import copy
from abc import ABC, abstractmethod
from contextlib import contextmanager
from threading import Lock
from typing import Dict, Iterator, List, Optional, Tuple

from src.models.event import Event
from src.models.group import Group
from src.models.person import Person
from src.models.ticket import Ticket


class GroupRepository(ABC):
    """Interface for group, event and user lookups."""

    @abstractmethod
    def get_group(self, group_id: str) -> Optional[Group]:
        """Return a group by ID, or None if not found."""
        ...

    @abstractmethod
    def save_group(self, group: Group) -> None:
        """Insert or replace a group."""
        ...

    @abstractmethod
    def list_groups(self, event_id: Optional[str] = None) -> List[Group]:
        """Return groups in creation order, optionally for one event."""
        ...

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[Person]:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def get_tickets(self, group_id: str, event_id: str) -> List[Ticket]:
        """Return tickets already issued for a group at an event."""
        ...

    @abstractmethod
    def save_tickets(self, group_id: str, event_id: str, tickets: List[Ticket]) -> None:
        """Replace the tickets issued for a group at an event."""
        ...

    @abstractmethod
    def lock_group(self, group_id: str):
        """Context manager holding an exclusive lock on one group."""
        ...


class InMemoryGroupRepository(GroupRepository):
    """Dictionary-backed repository with one lock per group.

    Groups are stored and returned as copies, so a caller only changes
    stored state by calling save_group().
    """

    def __init__(self) -> None:
        self._groups: Dict[str, Group] = {}
        self._events: Dict[str, Event] = {}
        self._users: Dict[str, Person] = {}
        self._tickets: Dict[Tuple[str, str], List[Ticket]] = {}
        # group ID -> [lock, number of holders and waiters]
        self._group_locks: Dict[str, list] = {}
        self._registry_lock = Lock()

    def add_event(self, event: Event) -> None:
        self._events[event.id] = event

    def add_user(self, user: Person) -> None:
        self._users[user.id] = user

    def list_events(self) -> List[Event]:
        return list(self._events.values())

    def list_users(self) -> List[Person]:
        return list(self._users.values())

    def get_group(self, group_id: str) -> Optional[Group]:
        group = self._groups.get(group_id)
        return copy.deepcopy(group) if group is not None else None

    def save_group(self, group: Group) -> None:
        self._groups[group.id] = copy.deepcopy(group)

    def list_groups(self, event_id: Optional[str] = None) -> List[Group]:
        groups = [copy.deepcopy(g) for g in self._groups.values()]
        if event_id is None:
            return groups
        return [g for g in groups if g.event_id == event_id]

    def get_event(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def get_user(self, user_id: str) -> Optional[Person]:
        return self._users.get(user_id)

    def get_tickets(self, group_id: str, event_id: str) -> List[Ticket]:
        return list(self._tickets.get((group_id, event_id), []))

    def save_tickets(self, group_id: str, event_id: str, tickets: List[Ticket]) -> None:
        self._tickets[(group_id, event_id)] = list(tickets)

    @contextmanager
    def lock_group(self, group_id: str) -> Iterator[None]:
        """
        Hold the lock for one group.

        Usage:
            with repository.lock_group(group_id):
                group = repository.get_group(group_id)
                ...
                repository.save_group(group)
        """
        with self._registry_lock:
            entry = self._group_locks.setdefault(group_id, [Lock(), 0])
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._group_locks[group_id]
