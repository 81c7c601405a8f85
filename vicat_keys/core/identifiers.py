"""Generators and format checks for keys, redeem codes, and usernames."""

from __future__ import annotations

import re
import secrets
import string
import uuid

KEY_PREFIX = "vicat"
KEY_SEGMENT_COUNT = 3
KEY_SEGMENT_LENGTH = 4
KEY_ALPHABET = string.ascii_lowercase + string.digits

REDEEM_CODE_LENGTH = 12
REDEEM_CODE_ALPHABET = string.ascii_uppercase + string.digits

KEY_PATTERN = re.compile(r"^vicat-[a-z0-9]{4}-[a-z0-9]{4}-[a-z0-9]{4}$")
REDEEM_CODE_PATTERN = re.compile(r"^[A-Z0-9]{12}$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9@]+$")


def _random_string(alphabet: str, length: int) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_vicat_key() -> str:
    """Return a new key such as ``vicat-a1b2-c3d4-e5f6``."""
    segments = [
        _random_string(KEY_ALPHABET, KEY_SEGMENT_LENGTH) for _ in range(KEY_SEGMENT_COUNT)
    ]
    return "-".join([KEY_PREFIX, *segments])


def generate_redeem_code() -> str:
    """Return a new 12 character redeem code of uppercase letters and digits."""
    return _random_string(REDEEM_CODE_ALPHABET, REDEEM_CODE_LENGTH)


def generate_session_token() -> str:
    """Return an opaque session token (UUID4, 122 random bits)."""
    return str(uuid.uuid4())


def generate_user_id() -> str:
    """Return a new user identifier."""
    return str(uuid.uuid4())


def is_valid_username(username: object) -> bool:
    """True when ``username`` is a non-empty string of letters, digits, and ``@``."""
    return isinstance(username, str) and USERNAME_PATTERN.fullmatch(username) is not None


def is_vicat_key(value: str) -> bool:
    """True when ``value`` matches the issued key format."""
    return KEY_PATTERN.fullmatch(value) is not None


__all__ = [
    "KEY_ALPHABET",
    "KEY_PATTERN",
    "KEY_PREFIX",
    "REDEEM_CODE_ALPHABET",
    "REDEEM_CODE_LENGTH",
    "REDEEM_CODE_PATTERN",
    "USERNAME_PATTERN",
    "generate_redeem_code",
    "generate_session_token",
    "generate_user_id",
    "generate_vicat_key",
    "is_valid_username",
    "is_vicat_key",
]
