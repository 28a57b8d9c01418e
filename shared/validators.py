"""
Input validators shared across services and routers.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from errors import ValidationError


def parse_object_id(value: Any, label: str = "id") -> ObjectId:
    """Convert *value* to an ObjectId or raise a 400 ``ValidationError``.

    Args:
        value: ObjectId instance or 24-char hex string.
        label: Human readable name used in the error message (``"cause"``).
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValidationError(f"Invalid {label} id: {value!r}", field=label)


def normalize_email(email: str) -> str:
    """Lowercase and strip an email address for storage and lookups."""
    return email.strip().lower()
