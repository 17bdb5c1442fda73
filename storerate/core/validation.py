"""
Field rules shared by the request schemas and the service layer.

Each checker returns the normalised value or raises ``ValueError`` with
a message fit for the client.
"""

from __future__ import annotations

import re

NAME_MIN, NAME_MAX = 20, 60
ADDRESS_MAX = 400
RATING_MIN, RATING_MAX = 1, 5
# Largest value a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*[!@#$%^&*]).{8,16}$")
_SORT_DIRECTIONS = {"asc", "desc"}


def check_name(value: str) -> str:
    value = value.strip()
    if not NAME_MIN <= len(value) <= NAME_MAX:
        raise ValueError(f"Name must be between {NAME_MIN} and {NAME_MAX} characters")
    return value


def check_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Valid email required")
    return value


def check_password(value: str) -> str:
    if not _PASSWORD_RE.match(value):
        raise ValueError(
            "Password must be 8-16 characters with uppercase and special character"
        )
    return value


def check_address(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if len(value) > ADDRESS_MAX:
        raise ValueError(f"Address must be at most {ADDRESS_MAX} characters")
    return value or None


def check_rating(value: int) -> int:
    # bool is an int subclass; True must not pass as a 1-star rating
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("Rating must be an integer")
    if not RATING_MIN <= value <= RATING_MAX:
        raise ValueError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
    return value


def parse_sort(value: str | None, allowed: set[str]) -> tuple[str, str] | None:
    """Split ``field:direction`` and check both halves against allow-lists."""
    if not value:
        return None
    field, _, direction = value.partition(":")
    direction = (direction or "asc").lower()
    if field not in allowed or direction not in _SORT_DIRECTIONS:
        raise ValueError(
            f"Sort must be '<field>:<asc|desc>' with field one of: {sorted(allowed)}"
        )
    return field, direction
