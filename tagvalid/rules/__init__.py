"""Bundled rules.

Every rule has the signature ``fn(value, field_name, param)`` and returns an
exception describing the violation, or None.
"""

from tagvalid.rules.dates import date
from tagvalid.rules.minmax import maximum, minimum
from tagvalid.rules.notempty import not_empty, not_nil
from tagvalid.rules.patterns import regex

# Registered by default_option(), in this order.
DEFAULT_RULES = {
    "notempty": not_empty,
    "notnil": not_nil,
    "min": minimum,
    "max": maximum,
    "regex": regex,
    "date": date,
}

__all__ = [
    "DEFAULT_RULES",
    "date",
    "maximum",
    "minimum",
    "not_empty",
    "not_nil",
    "regex",
]
