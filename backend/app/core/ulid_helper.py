"""ULID validation helpers."""

import ulid


def is_valid_ulid(value: str) -> bool:
    """Check if a string is a valid ULID."""
    if not isinstance(value, str) or len(value) != 26:
        return False
    try:
        ulid.ULID.from_str(value)
    except ValueError:
        return False
    return True
