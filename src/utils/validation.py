"""Data validation utilities."""
from typing import Any, Dict, List, Optional, Tuple

from src.utils.exceptions import InvalidInputError

PERSON_STRING_FIELDS = ["name", "email", "phone", "gender", "countryOfBirth", "languageAtHome", "state"]
PERSON_BOOL_FIELDS = ["isFirstNations", "hasDisability"]


def validate_identifier(value: Any, label: str = "ID") -> str:
    """
    Validate an opaque identifier.

    Args:
        value: Identifier to validate
        label: Human readable name used in the error message

    Returns:
        The identifier unchanged

    Raises:
        InvalidInputError: If the identifier is not a non-empty string
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} cannot be empty")
    return value


def validate_age(age: Any) -> Optional[int]:
    """
    Validate an optional age value.

    Args:
        age: Age in whole years, or None when not reported

    Returns:
        The age unchanged (None stays None)

    Raises:
        InvalidInputError: If age is not an integer or is negative
    """
    if age is None:
        return None

    # bool is a subclass of int
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidInputError(f"Age must be an integer: {age!r}")

    if age < 0:
        raise InvalidInputError(f"Age cannot be negative: {age}")

    return age


def validate_max_members(max_members: Any) -> int:
    """
    Validate group capacity.

    Raises:
        InvalidInputError: If max_members is not a positive integer
    """
    if isinstance(max_members, bool) or not isinstance(max_members, int) or max_members <= 0:
        raise InvalidInputError("Max members must be a positive integer")
    return max_members


def validate_person_data(person_data: Dict[str, Any]) -> bool:
    """
    Validate person data dictionary (JSON mapping of a Person).

    Args:
        person_data: Dictionary containing person fields

    Returns:
        True if valid

    Raises:
        InvalidInputError: If validation fails with detailed message
    """
    if not isinstance(person_data, dict):
        raise InvalidInputError("Person data must be a dictionary")

    if "id" in person_data:
        validate_identifier(person_data["id"], "Person ID")

    validate_age(person_data.get("age"))

    for field in PERSON_STRING_FIELDS:
        value = person_data.get(field)
        if value is not None and not isinstance(value, str):
            raise InvalidInputError(f"Field '{field}' must be a string")

    for field in PERSON_BOOL_FIELDS:
        value = person_data.get(field, False)
        if not isinstance(value, bool):
            raise InvalidInputError(f"Field '{field}' must be a boolean")

    return True


def validate_event_data(event_data: Dict[str, Any]) -> bool:
    """
    Validate event data dictionary.

    Raises:
        InvalidInputError: If validation fails with detailed message
    """
    if not isinstance(event_data, dict):
        raise InvalidInputError("Event data must be a dictionary")

    for field in ["id", "title", "date", "priceCents"]:
        if field not in event_data:
            raise InvalidInputError(f"Missing required event field: {field}")

    validate_identifier(event_data["id"], "Event ID")

    if not isinstance(event_data["title"], str) or not event_data["title"].strip():
        raise InvalidInputError("Event title cannot be empty")

    price_cents = event_data["priceCents"]
    if isinstance(price_cents, bool) or not isinstance(price_cents, int) or price_cents < 0:
        raise InvalidInputError("Price must be a non-negative integer amount of cents")

    return True


def validate_group_data(group_data: Dict[str, Any]) -> bool:
    """
    Validate group data dictionary.

    Member lists are stored as person IDs; derived fields
    (score, discount, completion) are never read from input.

    Raises:
        InvalidInputError: If validation fails with detailed message
    """
    if not isinstance(group_data, dict):
        raise InvalidInputError("Group data must be a dictionary")

    for field in ["id", "eventId", "name", "memberIds", "maxMembers"]:
        if field not in group_data:
            raise InvalidInputError(f"Missing required group field: {field}")

    validate_identifier(group_data["id"], "Group ID")
    validate_identifier(group_data["eventId"], "Event ID")

    if not isinstance(group_data["name"], str) or not group_data["name"].strip():
        raise InvalidInputError("Group name cannot be empty")

    member_ids = group_data["memberIds"]
    if not isinstance(member_ids, list):
        raise InvalidInputError("Member IDs must be a list")

    for member_id in member_ids:
        validate_identifier(member_id, "Member ID")

    validate_max_members(group_data["maxMembers"])

    return True


def validate_name(name: str) -> Tuple[bool, str]:
    """
    Validate attendee display name.

    Args:
        name: Name to validate

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Name cannot be empty") if empty
        - (False, "Name cannot exceed 50 characters") if too long
    """
    if not name or not name.strip():
        return False, "Name cannot be empty"
    if len(name) > 50:
        return False, "Name cannot exceed 50 characters"
    return True, ""


def find_duplicate_ids(ids: List[str]) -> List[str]:
    """Return IDs that appear more than once, in first-seen order."""
    seen = set()
    duplicates = []
    for value in ids:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates
