"""Helpers shared by the bundled rules.

Rule parameters are parsed from tag text on every call, so the numeric
parsers memoize by source text. Parse failures raise ``ValueError``; the
validator turns that into an internal-fault entry of the run.
"""

import collections.abc
import numbers
from typing import Any, Union

from tagvalid.cache import LiteralCache


def _parse_int(text: str) -> int:
    """Parse an integer literal: ``10``, ``-0xf``, ``0o77``, ``1_000``."""
    return int(text.strip(), 0)


def _parse_uint(text: str) -> int:
    value = _parse_int(text)
    if value < 0:
        raise ValueError(f"invalid unsigned integer literal: {text!r}")
    return value


def _parse_float(text: str) -> float:
    return float(text)


parse_int = LiteralCache(_parse_int)
parse_uint = LiteralCache(_parse_uint)
parse_float = LiteralCache(_parse_float)


def is_sized(value: Any) -> bool:
    """Values whose rules look at their length."""
    return isinstance(value, collections.abc.Sized)


def is_container(value: Any) -> bool:
    """Sequences, sets and mappings, excluding text."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (collections.abc.Sequence, collections.abc.Set, collections.abc.Mapping))


def numeric_limit(value: Any, param: str) -> Union[int, float, None]:
    """Parse ``param`` for comparison with a numeric ``value``.

    Returns None when the value is not a number rules know how to compare.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return parse_int(param)
    if isinstance(value, numbers.Real):
        return parse_float(param)
    return None
