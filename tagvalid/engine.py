"""Validator: tag name, rule registry and field cache behind one entry point.

Usage:
    validator = Validator(with_func("positive", positive))
    errors = validator.validate(order)
    if errors:
        for error in errors:
            ...

A validator is configured only through the options passed to its
constructor and is read-only afterwards, so one instance can be shared by
any number of threads.
"""

from typing import Any, Callable, Optional

import structlog

from tagvalid.cache import SnapshotCache
from tagvalid.config import DEFAULT_TAG_NAME
from tagvalid.errors import ConfigurationError, Errors, InternalError, ValidatorError
from tagvalid.models import ErrorCode
from tagvalid.registry import RuleFunc, RuleRegistry, check_rule
from tagvalid.shapes import FieldDescriptor, describe_fields
from tagvalid.walker import ValidationState

logger = structlog.get_logger()

Option = Callable[["Validator"], None]


class Validator:
    """Validates structs, sequences and mappings against tagged rules."""

    def __init__(self, *options: Option):
        self._tag_name = DEFAULT_TAG_NAME
        self._max_depth: Optional[int] = None
        self._frozen = False
        self.registry = RuleRegistry()
        self._field_cache: SnapshotCache[type, tuple[FieldDescriptor, ...]] = SnapshotCache()

        for option in options:
            option(self)
        self._frozen = True

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def max_depth(self) -> Optional[int]:
        return self._max_depth

    @property
    def rules(self) -> list[str]:
        """Names of the registered rules."""
        return self.registry.names()

    # ── Configuration (options only) ──

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigurationError("validator: cannot reconfigure a validator after construction")

    def _set_tag_name(self, tag_name: str) -> None:
        self._check_mutable()
        self._tag_name = tag_name

    def _set_max_depth(self, max_depth: Optional[int]) -> None:
        self._check_mutable()
        self._max_depth = max_depth

    def _register(self, name: str, fn: RuleFunc) -> None:
        self._check_mutable()
        self.registry.register(name, fn)

    # ── Validation ──

    def validate(self, value: Any) -> Optional[Errors]:
        """Validate a value and return every error found, or None.

        The value is usually a struct, but sequences, mappings and any other
        value are accepted too. This method does not raise: unexpected
        exceptions during the walk end the walk and are returned as the last
        error of the aggregate.
        """
        state = ValidationState(self, max_depth=self._max_depth)
        try:
            state.validate_value(value)
        except Exception as e:
            fault = e if isinstance(e, ValidatorError) else InternalError(e)
            logger.error(
                "validation_fault",
                error=str(e),
                error_type=type(e).__name__,
                path=state.path,
            )
            state.add_error(fault, ErrorCode.INTERNAL_FAULT)
        return state.result()

    def validate_or_raise(self, value: Any) -> None:
        """Like ``validate`` but raise the aggregate instead of returning it."""
        errors = self.validate(value)
        if errors is not None:
            raise errors

    def fields_for(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Cached field descriptors of a struct class."""
        fields, found = self._field_cache.get(cls)
        if found:
            return fields
        fields = describe_fields(cls, self._tag_name)
        self._field_cache.save(cls, fields)
        logger.debug("shape_cached", shape=cls.__qualname__, fields=len(fields))
        return fields


def new(*options: Option) -> Validator:
    """Return a validator with the given options and no rules beyond them.

    To start from the bundled rules, use ``tagvalid.default()`` or pass
    ``default_option()`` first.
    """
    return Validator(*options)


def with_tag_name(tag_name: str) -> Option:
    """Read field tags from this metadata key instead of ``"valid"``."""
    if not tag_name or not isinstance(tag_name, str):
        raise ConfigurationError(f"validator: invalid tag name {tag_name!r}")

    def option(v: Validator) -> None:
        v._set_tag_name(tag_name)

    return option


def with_func(name: str, fn: RuleFunc) -> Option:
    """Register a rule. A rule already registered under ``name`` is replaced.

    Raises ConfigurationError right away if name is empty or fn is not callable.
    """
    check_rule(name, fn)

    def option(v: Validator) -> None:
        v._register(name, fn)

    return option


def with_max_depth(max_depth: Optional[int]) -> Option:
    """Fail a run with RecursionDepthError once values nest deeper than this."""
    if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0):
        raise ConfigurationError(f"validator: invalid max depth {max_depth!r}")

    def option(v: Validator) -> None:
        v._set_max_depth(max_depth)

    return option
