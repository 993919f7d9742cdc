"""Error types raised and collected by the validator.

Field-level problems are never raised out of ``Validator.validate``; they are
collected into an ``Errors`` aggregate. Only ``ConfigurationError`` escapes,
and only while a validator is being built.

Every error rebuilds from its constructor arguments, so an aggregate survives
``pickle`` and ``copy.deepcopy`` and can be returned from a worker process.
"""

from typing import Iterator, NamedTuple, Optional, Sequence

from tagvalid.models import ErrorCode, ValidationReport, Violation


class ValidatorError(Exception):
    """Base exception for everything this package raises or collects."""
    pass


class ConfigurationError(ValidatorError):
    """Raised when a validator is wired up incorrectly."""
    pass


class FieldError(ValidatorError):
    """A rule matched a field but the value failed the rule's predicate."""

    def __init__(self, field: str, message: str, rule: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.message = message
        self.rule = rule

    def __reduce__(self):
        return type(self), (self.field, self.message, self.rule)


class UnsupportedError(ValidatorError):
    """A rule is not registered, or cannot interpret the value it was given."""

    def __init__(self, field: str, rule: Optional[str] = None):
        super().__init__("validator: unsupported: " + field)
        self.field = field
        self.rule = rule

    def __reduce__(self):
        return type(self), (self.field, self.rule)


class InternalError(ValidatorError):
    """An unexpected exception that escaped the walk."""

    def __init__(self, cause: BaseException):
        super().__init__(f"validator: internal error: {cause}")
        self.__cause__ = cause

    def __reduce__(self):
        return type(self), (self.__cause__,)


class RecursionDepthError(ValidatorError):
    """The walk went deeper than the configured maximum depth."""

    def __init__(self, max_depth: int):
        super().__init__(f"validator: recursion too deep (max depth {max_depth})")
        self.max_depth = max_depth

    def __reduce__(self):
        return type(self), (self.max_depth,)


class ErrorEntry(NamedTuple):
    """One recorded error with where and how it was found."""

    error: BaseException
    code: ErrorCode
    path: str


def classify(error: BaseException, default: ErrorCode = ErrorCode.SELF_VALIDATION) -> ErrorCode:
    """Error code for an error recorded without one."""
    if isinstance(error, FieldError):
        return ErrorCode.FIELD_VIOLATION
    if isinstance(error, UnsupportedError):
        return ErrorCode.UNSUPPORTED
    if isinstance(error, (InternalError, RecursionDepthError)):
        return ErrorCode.INTERNAL_FAULT
    return default


class Errors(ValidatorError):
    """Ordered list of every error found by one ``validate`` call.

    Iterating yields the member exceptions in encounter order; ``str()`` joins
    their messages with ``"; "``.
    """

    def __init__(self, errors: Sequence[BaseException], entries: Optional[Sequence[ErrorEntry]] = None):
        self.errors = list(errors)
        if entries is None:
            entries = [ErrorEntry(e, classify(e), "") for e in self.errors]
        self.entries = list(entries)
        super().__init__(str(self))

    def __reduce__(self):
        return type(self), (self.errors, self.entries)

    def __str__(self) -> str:
        return "; ".join(str(e) for e in self.errors)

    def __repr__(self) -> str:
        return f"Errors({self.errors!r})"

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> BaseException:
        return self.errors[index]

    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    def report(self) -> ValidationReport:
        """Structured, serializable view of the aggregate."""
        violations = []
        for entry in self.entries:
            violations.append(Violation(
                code=entry.code,
                message=str(entry.error),
                path=entry.path or None,
                field=getattr(entry.error, "field", None),
                rule=getattr(entry.error, "rule", None),
            ))
        return ValidationReport.build(violations)
