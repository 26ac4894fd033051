"""Field validation for events before they are queued."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from .exceptions import ValidationError


def validate_request(
    strings: Iterable[Any] = (),
    numbers: Iterable[Any] = (),
    timestamps: Iterable[Any] = (),
    mandatory: Iterable[Any] = (),
) -> None:
    """
    Check the typed fields of an event.

    Values that are None are skipped by the type checks; use `mandatory`
    for the fields that must be present.

    Raises:
        ValidationError: If any check fails
    """
    if any(item is None for item in mandatory):
        raise ValidationError("Mandatory fields cannot be None")

    for item in strings:
        if item is not None and (not isinstance(item, str) or item == ""):
            raise ValidationError("String fields must be non-empty strings")

    for item in numbers:
        # bool is an int subclass but never a valid count of milliseconds
        if item is not None and (isinstance(item, bool) or not isinstance(item, int)):
            raise ValidationError("Integer fields must be integers")

    for item in timestamps:
        if item is not None and not isinstance(item, datetime):
            raise ValidationError("Datetime fields must be datetime instances")


def validate_properties(properties: Any) -> None:
    """Properties, when given, must be a dict."""
    if properties is not None and not isinstance(properties, dict):
        raise ValidationError("Properties must be a dict")
