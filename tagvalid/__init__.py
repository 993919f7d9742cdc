"""tagvalid: tag-driven validation of dataclasses and pydantic models.

Usage:
    from dataclasses import dataclass, field
    from tagvalid import validate

    @dataclass
    class Order:
        id: str = field(metadata={"valid": "notempty"})
        quantity: int = field(default=0, metadata={"valid": "min=1,max=10"})

    errors = validate(Order(id="", quantity=11))
    # id must not be empty; quantity must not be greater than 10 (was 11)
"""

from tagvalid.defaults import default, default_option, default_validator, validate
from tagvalid.engine import Option, Validator, new, with_func, with_max_depth, with_tag_name
from tagvalid.errors import (
    ConfigurationError,
    Errors,
    FieldError,
    InternalError,
    RecursionDepthError,
    UnsupportedError,
    ValidatorError,
)
from tagvalid.log import configure_logging
from tagvalid.models import ErrorCode, ValidationReport, Violation

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "Errors",
    "FieldError",
    "InternalError",
    "Option",
    "RecursionDepthError",
    "UnsupportedError",
    "ValidationReport",
    "Validator",
    "ValidatorError",
    "Violation",
    "configure_logging",
    "default",
    "default_option",
    "default_validator",
    "new",
    "validate",
    "with_func",
    "with_max_depth",
    "with_tag_name",
]
