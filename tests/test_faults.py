"""validate() never raises: unexpected failures become one aggregate entry."""

from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
from structlog.testing import capture_logs

from tagvalid import (
    ConfigurationError,
    ErrorCode,
    InternalError,
    RecursionDepthError,
    Validator,
    with_func,
    with_max_depth,
    with_tag_name,
)


def tagged(tags, **kwargs):
    return field(metadata={"valid": tags}, **kwargs)


def boom(value, name, param):
    raise RuntimeError("boom")


def nok(value, name, param):
    return ValueError("nok")


@dataclass
class Chain:
    a: int = tagged("nok")
    next: Optional["Chain"] = None


class TestFaultBoundary:
    def test_rule_exception_is_captured(self):
        @dataclass
        class Form:
            a: str = tagged("nok")
            b: str = tagged("boom")
            c: str = tagged("nok")

        v = Validator(with_func("nok", nok), with_func("boom", boom))
        errors = v.validate(Form("", "", ""))

        # The walk stops at the fault; what was found before it is kept.
        assert errors.messages() == ["nok", "validator: internal error: boom"]
        fault = errors[1]
        assert isinstance(fault, InternalError)
        assert isinstance(fault.__cause__, RuntimeError)
        assert errors.entries[1].code == ErrorCode.INTERNAL_FAULT
        assert errors.entries[1].path == "b"

    def test_fault_is_logged(self):
        v = Validator(with_func("boom", boom))

        @dataclass
        class Form:
            a: str = tagged("boom")

        with capture_logs() as logs:
            v.validate(Form(""))

        faults = [entry for entry in logs if entry["event"] == "validation_fault"]
        assert len(faults) == 1
        assert faults[0]["log_level"] == "error"
        assert faults[0]["error_type"] == "RuntimeError"

    def test_failing_self_validation_hook(self):
        class Broken:
            def validate_self(self):
                raise KeyError("missing")

        errors = Validator().validate([Broken()])
        assert len(errors) == 1
        assert isinstance(errors[0], InternalError)

    def test_bad_tag_metadata_is_recorded_as_is(self):
        @dataclass
        class Form:
            a: str = field(default="", metadata={"valid": 42})

        errors = Validator().validate(Form())
        assert isinstance(errors[0], ConfigurationError)

    def test_cyclic_values_hit_the_interpreter_limit(self):
        cycle: list[Any] = []
        cycle.append(cycle)

        errors = Validator().validate(cycle)
        assert len(errors) == 1
        assert isinstance(errors[0], InternalError)
        assert isinstance(errors[0].__cause__, RecursionError)


class TestDepthGuard:
    def _chain(self, length):
        head = None
        for _ in range(length):
            head = Chain(a=1, next=head)
        return head

    def test_within_limit(self):
        v = Validator(with_func("nok", nok), with_max_depth(10))
        errors = v.validate(self._chain(3))
        assert errors.messages() == ["nok", "nok", "nok"]

    def test_too_deep(self):
        v = Validator(with_func("nok", nok), with_max_depth(2))
        errors = v.validate(self._chain(5))
        assert isinstance(errors[-1], RecursionDepthError)
        assert str(errors[-1]) == "validator: recursion too deep (max depth 2)"
        assert errors.messages()[:-1] == ["nok", "nok", "nok"]

    def test_cycle_with_guard(self):
        cycle: list[Any] = []
        cycle.append(cycle)
        errors = Validator(with_max_depth(50)).validate(cycle)
        assert isinstance(errors[0], RecursionDepthError)

    @pytest.mark.parametrize("bad", [-1, 1.5, "3", True])
    def test_invalid_depth(self, bad):
        with pytest.raises(ConfigurationError):
            with_max_depth(bad)


class TestConfigurationErrors:
    """Wiring mistakes fail when the validator is built, not during validation."""

    def test_empty_rule_name(self):
        with pytest.raises(ConfigurationError):
            with_func("", nok)

    def test_missing_rule_function(self):
        with pytest.raises(ConfigurationError):
            with_func("nok", None)

    def test_empty_tag_name(self):
        with pytest.raises(ConfigurationError):
            with_tag_name("")

    def test_validator_is_read_only_after_construction(self):
        v = Validator(with_func("nok", nok))
        with pytest.raises(ConfigurationError):
            with_func("extra", nok)(v)
        with pytest.raises(ConfigurationError):
            with_tag_name("other")(v)
        assert v.rules == ["nok"]
        assert v.tag_name == "valid"

    def test_later_registration_wins(self):
        @dataclass
        class Form:
            a: str = tagged("rule")

        v = Validator(with_func("rule", nok), with_func("rule", lambda value, name, param: None))
        assert v.validate(Form("")) is None
