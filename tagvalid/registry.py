"""Rule registry: maps rule names to rule functions."""

from typing import Callable, Optional

from tagvalid.errors import ConfigurationError

# fn(value, field_name, param) -> error or None
RuleFunc = Callable[[object, str, str], Optional[BaseException]]


def check_rule(name: str, fn: RuleFunc) -> None:
    """Fail fast on a registration that can never work."""
    if not name or not isinstance(name, str):
        raise ConfigurationError(f"validator: invalid handler {name!r}: name must be a non-empty string")
    if fn is None or not callable(fn):
        raise ConfigurationError(f"validator: invalid handler {name!r}: function must be callable")


class RuleRegistry:
    """Rules registered on one validator. The last registration for a name wins."""

    def __init__(self) -> None:
        self._rules: dict[str, RuleFunc] = {}

    def register(self, name: str, fn: RuleFunc) -> None:
        check_rule(name, fn)
        self._rules[name] = fn

    def lookup(self, name: str) -> Optional[RuleFunc]:
        return self._rules.get(name)

    def names(self) -> list[str]:
        """List registered rule names in registration order."""
        return list(self._rules.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)
