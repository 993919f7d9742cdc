"""Tests for the structured report of an aggregate."""

from dataclasses import dataclass, field

from tagvalid import (
    ErrorCode,
    Errors,
    FieldError,
    InternalError,
    UnsupportedError,
    ValidationReport,
    Validator,
    default,
)


@dataclass
class Item:
    sku: str = field(default="", metadata={"valid": "notempty,bogus"})
    qty: int = field(default=0, metadata={"valid": "min=1"})

    def validate_self(self):
        if self.sku == "x" and self.qty > 1:
            return ValueError("x ships one at a time")
        return None


class TestReport:
    def test_codes_paths_and_rules(self):
        errors = default().validate([Item(sku="", qty=0), Item(sku="x", qty=2)])
        report = errors.report()

        assert report.passed is False
        assert report.summary == {
            "FIELD_VIOLATION": 2,
            "UNSUPPORTED": 2,
            "SELF_VALIDATION": 1,
            "INTERNAL_FAULT": 0,
        }
        assert [(v.code, v.path, v.field, v.rule) for v in report.violations] == [
            ("FIELD_VIOLATION", "[0].sku", "sku", "notempty"),
            ("UNSUPPORTED", "[0].sku", "sku", "bogus"),
            ("FIELD_VIOLATION", "[0].qty", "qty", "min"),
            ("SELF_VALIDATION", "[1]", None, None),
            ("UNSUPPORTED", "[1].sku", "sku", "bogus"),
        ]

    def test_serializable(self):
        errors = default().validate(Item(sku="a", qty=0))
        data = errors.report().model_dump()
        assert data == {
            "passed": False,
            "summary": {
                "FIELD_VIOLATION": 1,
                "UNSUPPORTED": 1,
                "SELF_VALIDATION": 0,
                "INTERNAL_FAULT": 0,
            },
            "violations": [
                {
                    "code": "UNSUPPORTED",
                    "message": "validator: unsupported: sku",
                    "path": "sku",
                    "field": "sku",
                    "rule": "bogus",
                },
                {
                    "code": "FIELD_VIOLATION",
                    "message": "qty must not be less than 1 (was 0)",
                    "path": "qty",
                    "field": "qty",
                    "rule": "min",
                },
            ],
        }

    def test_top_level_error_has_no_path(self):
        class Bad:
            def validate_self(self):
                return ValueError("bad")

        errors = Validator().validate(Bad())
        violation = errors.report().violations[0]
        assert violation.path is None
        assert violation.code == "SELF_VALIDATION"

    def test_empty_report(self):
        report = ValidationReport.build([])
        assert report.passed is True
        assert set(report.summary.values()) == {0}


class TestErrorsWithoutEntries:
    """Errors built by hand classify their members by type."""

    def test_classified_by_type(self):
        errors = Errors([
            FieldError("a", "a is wrong", rule="r"),
            UnsupportedError("b"),
            InternalError(RuntimeError("boom")),
            ValueError("custom"),
        ])
        assert [e.code for e in errors.entries] == [
            ErrorCode.FIELD_VIOLATION,
            ErrorCode.UNSUPPORTED,
            ErrorCode.INTERNAL_FAULT,
            ErrorCode.SELF_VALIDATION,
        ]
        assert str(errors) == "a is wrong; validator: unsupported: b; validator: internal error: boom; custom"

    def test_sequence_protocol(self):
        first, second = ValueError("one"), ValueError("two")
        errors = Errors([first, second])
        assert len(errors) == 2
        assert errors[0] is first
        assert list(errors) == [first, second]
        assert errors.messages() == ["one", "two"]
