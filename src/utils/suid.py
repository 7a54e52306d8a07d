"""Unique ID utility functions."""

import uuid


def get_suid() -> str:
    """
    Generate a unique ID (SUID) using UUID4.

    The value is a canonical RFC 4122 UUID (hex groups separated by
    hyphens) generated with uuid.uuid4(). It is used to identify history
    entries.

    Returns:
        str: A UUID4 string.
    """
    return str(uuid.uuid4())


def check_suid(suid: str) -> bool:
    """
    Check if given string is a proper unique ID.

    Returns True if the string is a valid UUID, False otherwise.
    """
    try:
        # accepts strings and bytes only
        uuid.UUID(suid)
        return True
    except (ValueError, TypeError):
        return False
