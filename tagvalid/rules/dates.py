"""date rule: text must parse with the layout given as parameter.

Layouts use placeholder tokens, longest match first:

    YYYY  2006      YY  06
    MMMM  January   MMM Jan    MM 01   M 1
    DDDD  Monday    DDD Mon    DD 02   D 2
    hh    15        h   3      pm PM   mm 04   ss 05

Any other character must appear literally. A layout containing ``%`` is
taken as a ``strptime`` format as is.
"""

import re
from datetime import date as Date, datetime
from typing import Any, Optional

from tagvalid.cache import SnapshotCache
from tagvalid.errors import FieldError

_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "DDDD": "%A",
    "DDD": "%a",
    "DD": "%d",
    "D": "%d",
    "hh": "%H",
    "h": "%I",
    "pm": "%p",
    "PM": "%p",
    "mm": "%M",
    "ss": "%S",
}
_TOKEN_RE = re.compile("|".join(sorted(_TOKENS, key=len, reverse=True)))

_formats: SnapshotCache[str, str] = SnapshotCache()


def to_strptime(layout: str) -> str:
    """Translate a placeholder layout into a ``strptime`` format."""
    if "%" in layout:
        return layout
    return _TOKEN_RE.sub(lambda m: _TOKENS[m.group(0)], layout)


def date(value: Any, name: str, param: str) -> Optional[Exception]:
    if value is None or isinstance(value, Date):
        return None
    if not isinstance(value, str):
        return FieldError(name, f"{name} is not a valid date", rule="date")

    fmt = _formats.get_or_compute(param, to_strptime)
    try:
        datetime.strptime(value, fmt)
    except ValueError as e:
        return FieldError(name, f"{name} is not a valid date. {e}", rule="date")
    return None
