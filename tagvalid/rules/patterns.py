"""regex rule: the value's text must contain a match for the pattern."""

import re
from typing import Any, Optional

from tagvalid.cache import SnapshotCache
from tagvalid.errors import FieldError
from tagvalid.rules.base import is_container

# Invalid patterns are cached as None.
_patterns: SnapshotCache[str, Optional[re.Pattern]] = SnapshotCache()


def _compile(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def regex(value: Any, name: str, param: str) -> Optional[Exception]:
    if value is None:
        return None
    if is_container(value):
        return FieldError(name, f"{name} must not be a sequence or mapping", rule="regex")

    pattern = _patterns.get_or_compute(param, _compile)
    if pattern is None:
        return FieldError(name, f"{name} regex is not valid", rule="regex")

    text = value if isinstance(value, str) else str(value)
    if not pattern.search(text):
        return FieldError(name, f"{name} is not a valid value", rule="regex")
    return None
