"""Runtime settings read from the environment and an optional .env file."""
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock

from src.utils.exceptions import InvalidInputError

SETTINGS_KEYS = {"SEAT_BASE", "SEAT_ROW", "SEAT_SECTION", "DATA_FILE", "LOG_LEVEL"}

DEFAULT_SEAT_BASE = 20
DEFAULT_SEAT_ROW = "12"
DEFAULT_SEAT_SECTION = "Section A"
DEFAULT_DATA_FILE = "data/seed.json"
DEFAULT_LOG_LEVEL = "INFO"

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class SeatSettings:
    """Where a group's seats start."""

    base: int
    row: str
    section: str


def _load_env(env_path: str = ".env") -> None:
    """Load settings from .env file if present. Existing variables win."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        path = Path(env_path)
        if path.exists():
            for raw_line in path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in SETTINGS_KEYS and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def get_seat_settings() -> SeatSettings:
    """
    Read seat allocation defaults.

    Returns:
        SeatSettings from SEAT_BASE, SEAT_ROW and SEAT_SECTION

    Raises:
        InvalidInputError: If SEAT_BASE is not a positive integer
    """
    _load_env()

    raw_base = os.getenv("SEAT_BASE", str(DEFAULT_SEAT_BASE))
    try:
        base = int(raw_base)
    except ValueError as e:
        raise InvalidInputError(f"SEAT_BASE must be an integer: {raw_base}") from e

    if base <= 0:
        raise InvalidInputError(f"SEAT_BASE must be positive: {base}")

    return SeatSettings(
        base=base,
        row=os.getenv("SEAT_ROW", DEFAULT_SEAT_ROW),
        section=os.getenv("SEAT_SECTION", DEFAULT_SEAT_SECTION),
    )


def get_data_file() -> str:
    """Path of the JSON snapshot the app seeds its repository from."""
    _load_env()
    return os.getenv("DATA_FILE", DEFAULT_DATA_FILE)


def get_log_level() -> str:
    _load_env()
    return os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
