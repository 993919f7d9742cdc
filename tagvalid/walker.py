"""Recursive traversal of values.

A ``ValidationState`` lives for exactly one ``Validator.validate`` call. It
walks the value, dispatches tagged struct fields to registered rules, and
records every error it meets in encounter order:

    1. ``validate_self()`` of the value, if it has one
    2. stop on ``None``
    3. struct fields in declaration order (rules in tag order, then the
       field's own value), sequence elements in index order, mapping values
       in the mapping's iteration order
"""

from typing import TYPE_CHECKING, Any, Optional

from tagvalid.errors import ErrorEntry, Errors, RecursionDepthError, UnsupportedError, classify
from tagvalid.models import ErrorCode
from tagvalid.shapes import (
    Kind,
    element_hint,
    is_recursible,
    is_validatable,
    kind_of_type,
    kind_of_value,
    resolve_hint,
    value_hint,
)
from tagvalid.tags import parse_tags

if TYPE_CHECKING:
    from tagvalid.engine import Validator


class ValidationState:
    """Errors and position of one validation run."""

    def __init__(self, validator: "Validator", max_depth: Optional[int] = None):
        self.validator = validator
        self.max_depth = max_depth
        self.entries: list[ErrorEntry] = []
        self._path: list[str] = []

    @property
    def path(self) -> str:
        return "".join(self._path).lstrip(".")

    def add_error(self, error: BaseException, code: Optional[ErrorCode] = None) -> None:
        if code is None:
            code = classify(error)
        self.entries.append(ErrorEntry(error, code, self.path))

    def result(self) -> Optional[Errors]:
        if not self.entries:
            return None
        return Errors([entry.error for entry in self.entries], self.entries)

    # ── Walk ──

    def validate_value(self, value: Any, hint: Any = Any, depth: int = 0) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise RecursionDepthError(self.max_depth)

        self._validate_validatable(value)

        if value is None:
            return

        hint = resolve_hint(hint)
        kind = kind_of_value(value)
        if kind is Kind.STRUCT:
            self._validate_struct(value, depth)
        elif kind is Kind.SEQUENCE:
            self._validate_sequence(value, hint, depth)
        elif kind is Kind.MAPPING:
            self._validate_mapping(value, hint, depth)

    def _validate_validatable(self, value: Any) -> None:
        if not is_validatable(value):
            return
        error = value.validate_self()
        if error is not None:
            self.add_error(error, ErrorCode.SELF_VALIDATION)

    def _validate_struct(self, value: Any, depth: int) -> None:
        for field in self.validator.fields_for(type(value)):
            field_value = getattr(value, field.name)
            self._path.append("." + field.name)
            if field.tags:
                self._validate_field(field_value, field.name, field.tags)
            self.validate_value(field_value, field.hint, depth + 1)
            self._path.pop()

    def _validate_sequence(self, value: Any, hint: Any, depth: int) -> None:
        element = element_hint(hint) if kind_of_type(hint) is Kind.SEQUENCE else Any
        if not is_recursible(element):
            return
        for index, item in enumerate(value):
            self._path.append(f"[{index}]")
            self.validate_value(item, element, depth + 1)
            self._path.pop()

    def _validate_mapping(self, value: Any, hint: Any, depth: int) -> None:
        element = value_hint(hint) if kind_of_type(hint) is Kind.MAPPING else Any
        if not is_recursible(element) or not value:
            return
        for key, item in value.items():
            self._path.append(f"[{key!r}]")
            self.validate_value(item, element, depth + 1)
            self._path.pop()

    def _validate_field(self, value: Any, name: str, tags: str) -> None:
        for rule, param in parse_tags(tags):
            fn = self.validator.registry.lookup(rule)
            if fn is None:
                self.add_error(UnsupportedError(name, rule=rule), ErrorCode.UNSUPPORTED)
                continue
            error = fn(value, name, param)
            if error is not None:
                self.add_error(error, classify(error, default=ErrorCode.FIELD_VIOLATION))
