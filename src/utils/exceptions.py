"""Custom exception classes."""


class DiversityGroupsError(Exception):
    """Base class for all domain errors."""
    pass


class InvalidInputError(DiversityGroupsError, ValueError):
    """Raised when a record fails boundary validation (e.g. negative age, empty id)."""
    pass


class GroupFullError(DiversityGroupsError):
    """Raised when joining a group that has no spots left."""
    pass


class DuplicateMemberError(DiversityGroupsError):
    """Raised when a person is already a member of the group."""
    pass


class CapacityExceededError(DiversityGroupsError):
    """Raised when a group is created with more members than it can hold."""
    pass


class GroupNotFoundError(DiversityGroupsError):
    """Raised when group ID doesn't exist."""
    pass


class EventNotFoundError(DiversityGroupsError):
    """Raised when event ID doesn't exist."""
    pass


class UserNotFoundError(DiversityGroupsError):
    """Raised when user ID doesn't exist."""
    pass
