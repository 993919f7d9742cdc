"""Default configuration and the process-wide default validator.

Usage:
    from tagvalid import validate

    errors = validate(order)
"""

from typing import Any, Optional

from tagvalid.config import get_settings
from tagvalid.engine import Option, Validator
from tagvalid.errors import Errors
from tagvalid.rules import DEFAULT_RULES


def default_option() -> Option:
    """Option applying the settings' tag name and max depth and registering the bundled rules.

    Pass it first and follow it with overrides:
        Validator(default_option(), with_func("min", strict_min))
    """
    settings = get_settings()

    def option(v: Validator) -> None:
        v._set_tag_name(settings.TAG_NAME)
        v._set_max_depth(settings.MAX_DEPTH)
        for name, fn in DEFAULT_RULES.items():
            v._register(name, fn)

    return option


def default() -> Validator:
    """Return a new validator configured with ``default_option()``."""
    return Validator(default_option())


# Module-level singleton, built once at import and never reconfigured.
default_validator = default()


def validate(value: Any) -> Optional[Errors]:
    """Validate with the default validator."""
    return default_validator.validate(value)
