"""Tag string parsing.

A tag is a comma-separated list of ``name`` or ``name=param`` entries, e.g.
``"notempty,min=1,max=10"``. There is no escaping: a parameter cannot
contain a literal ``,``. The first ``=`` of an entry separates name from
parameter, so later ``=`` characters stay part of the parameter.
"""

from typing import Iterator

EXCLUDE = "-"


def parse_tag(tag: str) -> tuple[str, str]:
    """Split one entry into rule name and parameter."""
    name, _, param = tag.partition("=")
    return name, param


def parse_tags(tags: str) -> Iterator[tuple[str, str]]:
    """Yield ``(name, param)`` pairs left to right.

    A trailing comma ends the list; an empty entry elsewhere yields an empty
    rule name.
    """
    while tags:
        tag, _, tags = tags.partition(",")
        yield parse_tag(tag)
