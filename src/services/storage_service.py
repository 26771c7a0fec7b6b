"""JSON snapshot I/O for events, users and groups."""
import json
import logging
import os
import shutil
import tempfile
import time
from typing import Any, Dict

from src.models.event import Event
from src.models.group import Group
from src.models.person import Person
from src.services.repository import InMemoryGroupRepository
from src.utils.exceptions import UserNotFoundError
from src.utils.validation import validate_group_data

logger = logging.getLogger(__name__)


def load_json(file_path: str, retry_count: int = 3, retry_delay: float = 0.1) -> Dict[str, Any]:
    """
    Load and parse JSON file with UTF-8 encoding.

    Args:
        file_path: Path to JSON file
        retry_count: Number of retry attempts for permission errors (default: 3)
        retry_delay: Delay in seconds between retries (default: 0.1)

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        PermissionError: If file not readable after retries
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    for attempt in range(retry_count):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except PermissionError:
            if attempt < retry_count - 1:
                time.sleep(retry_delay)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            )

    raise PermissionError(f"Cannot read file after {retry_count} attempts: {file_path}")


def save_json(file_path: str, data: Dict[str, Any], backup: bool = True) -> None:
    """
    Save data to JSON file atomically with UTF-8 encoding.

    Writes to a temporary file in the same directory and renames it over
    the target, so readers never see a half-written file.

    Args:
        file_path: Path to JSON file
        data: Dictionary to save
        backup: If True, copy the existing file to <file_path>.backup first

    Raises:
        IOError: If the backup or the write fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path and not os.path.exists(dir_path):
        os.makedirs(dir_path, exist_ok=True)

    if backup and os.path.exists(file_path):
        try:
            shutil.copy2(file_path, f"{file_path}.backup")
        except OSError as e:
            raise IOError(f"Failed to create backup: {e}") from e

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path if dir_path else ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, file_path)

    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise IOError(f"Failed to write file {file_path}: {e}") from e


def group_to_dict(group: Group) -> Dict[str, Any]:
    """JSON mapping of a group; members are stored by ID."""
    return {
        "id": group.id,
        "eventId": group.event_id,
        "name": group.name,
        "memberIds": group.member_ids(),
        "maxMembers": group.max_members,
        "createdAt": group.created_at,
    }


def load_repository(data: Dict[str, Any]) -> InMemoryGroupRepository:
    """
    Build an in-memory repository from a snapshot dictionary.

    Args:
        data: {"events": [...], "users": [...], "groups": [...]}

    Returns:
        Populated repository; group scores are recomputed, not read

    Raises:
        InvalidInputError: If a record fails validation
        UserNotFoundError: If a group references an unknown user
        CapacityExceededError, DuplicateMemberError: If a group is malformed
    """
    repository = InMemoryGroupRepository()

    for event_data in data.get("events", []):
        repository.add_event(Event.from_dict(event_data))

    for user_data in data.get("users", []):
        repository.add_user(Person.from_dict(user_data))

    for group_data in data.get("groups", []):
        validate_group_data(group_data)

        members = []
        for member_id in group_data["memberIds"]:
            user = repository.get_user(member_id)
            if user is None:
                raise UserNotFoundError(
                    f"Group {group_data['id']} references unknown user: {member_id}"
                )
            members.append(user)

        kwargs = {}
        if group_data.get("createdAt"):
            kwargs["created_at"] = group_data["createdAt"]

        repository.save_group(Group(
            id=group_data["id"],
            event_id=group_data["eventId"],
            name=group_data["name"],
            members=members,
            max_members=group_data["maxMembers"],
            **kwargs,
        ))

    logger.info(
        f"Loaded {len(repository.list_events())} events, {len(repository.list_users())} users, "
        f"{len(repository.list_groups())} groups"
    )
    return repository


def dump_repository(repository: InMemoryGroupRepository) -> Dict[str, Any]:
    """Snapshot dictionary for an in-memory repository."""
    return {
        "events": [event.to_dict() for event in repository.list_events()],
        "users": [user.to_dict() for user in repository.list_users()],
        "groups": [group_to_dict(group) for group in repository.list_groups()],
    }


def load_repository_file(file_path: str) -> InMemoryGroupRepository:
    """Read a snapshot file into a new repository."""
    return load_repository(load_json(file_path))


def save_repository_file(file_path: str, repository: InMemoryGroupRepository, backup: bool = True) -> None:
    """Write a repository snapshot to file atomically."""
    save_json(file_path, dump_repository(repository), backup=backup)
