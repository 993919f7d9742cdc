"""min / max rules.

Containers and text are bounded by length, numbers by value. The parameter
text is echoed as written in the messages, so ``max=0xFF`` reports
``0xFF``. None passes both rules; use ``notnil`` to require a value.
"""

from typing import Any, Optional

from tagvalid.errors import FieldError, UnsupportedError
from tagvalid.rules.base import is_sized, numeric_limit, parse_uint


def minimum(value: Any, name: str, param: str) -> Optional[Exception]:
    if value is None:
        return None
    if is_sized(value):
        length = len(value)
        if length < parse_uint(param):
            return FieldError(name, f"{name} must have length not less than {param} (was {length})", rule="min")
        return None
    limit = numeric_limit(value, param)
    if limit is None:
        return UnsupportedError(name, rule="min")
    if value < limit:
        return FieldError(name, f"{name} must not be less than {param} (was {value})", rule="min")
    return None


def maximum(value: Any, name: str, param: str) -> Optional[Exception]:
    if value is None:
        return None
    if is_sized(value):
        length = len(value)
        if length > parse_uint(param):
            return FieldError(name, f"{name} must have length not greater than {param} (was {length})", rule="max")
        return None
    limit = numeric_limit(value, param)
    if limit is None:
        return UnsupportedError(name, rule="max")
    if value > limit:
        return FieldError(name, f"{name} must not be greater than {param} (was {value})", rule="max")
    return None
