import uuid
from typing import Any


def new_id() -> str:
    """Generate a new opaque record identifier"""
    return str(uuid.uuid4())


def is_valid_id(value: Any) -> bool:
    """Check that value is a canonical identifier string"""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value
    except ValueError:
        return False
