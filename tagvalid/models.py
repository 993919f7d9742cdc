"""Report models: error codes and the structured view of an aggregate.

Reports are plain data: building one never re-runs validation.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """Where a recorded error came from."""

    FIELD_VIOLATION = "FIELD_VIOLATION"  # A rule rejected a field value
    UNSUPPORTED = "UNSUPPORTED"          # Unknown rule, or rule cannot read the value
    SELF_VALIDATION = "SELF_VALIDATION"  # Returned by a value's validate_self()
    INTERNAL_FAULT = "INTERNAL_FAULT"    # Unexpected exception during the walk


class Violation(BaseModel):
    """A single recorded error."""

    model_config = ConfigDict(use_enum_values=True)

    code: ErrorCode
    message: str
    path: Optional[str] = None   # Position in the walked value, e.g. "d[1].b"
    field: Optional[str] = None  # Field name the error is attributed to
    rule: Optional[str] = None   # Rule name, when known


class ValidationReport(BaseModel):
    """Structured form of one validation run."""

    passed: bool = Field(description="True if no errors were recorded")
    summary: dict[str, int] = Field(
        description="Count of errors by code",
        default_factory=lambda: {code.value: 0 for code in ErrorCode},
    )
    violations: list[Violation] = Field(default_factory=list)

    @classmethod
    def build(cls, violations: list[Violation]) -> "ValidationReport":
        """Build a report from violations, keeping their order."""
        summary = {code.value: 0 for code in ErrorCode}
        for violation in violations:
            summary[violation.code] += 1

        return cls(
            passed=not violations,
            summary=summary,
            violations=violations,
        )
