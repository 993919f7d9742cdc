"""Shared fixtures for the tagvalid test-suite."""

import pytest
import structlog

from tagvalid import Errors, Validator, with_func
from tagvalid.config import get_settings

ERR_NOK = ValueError("nok")


def ok(value, name, param):
    return None


def nok(value, name, param):
    return ERR_NOK


@pytest.fixture
def validator():
    """Validator with an always-passing ``ok`` and an always-failing ``nok`` rule."""
    return Validator(with_func("ok", ok), with_func("nok", nok))


@pytest.fixture
def assert_nok():
    """Check that a run produced exactly ``n`` errors, all from the ``nok`` rule."""

    def check(errors, n):
        assert errors is not None, "error expected"
        assert isinstance(errors, Errors)
        assert len(errors) == n, f"unexpected errors: {errors!r}; want: {n}"
        for error in errors:
            assert "nok" in str(error), f"unexpected error: {error!r}"

    return check


@pytest.fixture
def clean_settings():
    """Drop cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
