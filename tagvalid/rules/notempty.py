"""notempty / notnil rules."""

import numbers
from typing import Any, Optional

from tagvalid.errors import FieldError, UnsupportedError
from tagvalid.rules.base import is_sized


def not_empty(value: Any, name: str, param: str) -> Optional[Exception]:
    """Reject None, empty containers and text, False, and zero."""
    if value is None:
        return FieldError(name, f"{name} must not be None", rule="notempty")
    if isinstance(value, bool):
        if not value:
            return FieldError(name, f"{name} must not be false", rule="notempty")
        return None
    if is_sized(value):
        if len(value) == 0:
            return FieldError(name, f"{name} must not be empty", rule="notempty")
        return None
    if isinstance(value, numbers.Number):
        if value == 0:
            return FieldError(name, f"{name} must not be zero", rule="notempty")
        return None
    return UnsupportedError(name, rule="notempty")


def not_nil(value: Any, name: str, param: str) -> Optional[Exception]:
    if value is None:
        return FieldError(name, f"{name} must not be None", rule="notnil")
    return None
