"""
Shared pytest fixtures for exprcalc tests.

This module provides:
- A ``calc`` helper that evaluates an expression
- ``assert_calc_error`` for checking fault kinds and spans
- Isolation of cached settings and logging state between tests
"""

import logging

import pytest

from exprcalc import calculate
from exprcalc.core.config import get_settings
from exprcalc.core.errors import CalcError, ErrorKind
from exprcalc.core.logging import close_history_logger
from exprcalc.math.value import Value


@pytest.fixture
def calc():
    """Evaluate an expression with default options."""
    def _calc(expression: str) -> Value:
        return calculate(expression)
    return _calc


@pytest.fixture
def assert_calc_error():
    """Helper to assert that an expression faults with a given kind."""
    def _assert_error(
        expression: str,
        kind: ErrorKind,
        start: int | None = None,
    ) -> CalcError:
        """
        Assert that calculating ``expression`` raises ``kind``.

        Args:
            expression: Expression to evaluate
            kind: Expected fault kind
            start: Expected start offset of the fault (optional)

        Returns:
            The CalcError that was raised
        """
        with pytest.raises(CalcError) as exc_info:
            calculate(expression)

        error = exc_info.value
        assert error.kind == kind, f"expected {kind.value}, got {error.kind.value}: {error}"
        if start is not None:
            assert error.start == start, f"expected fault at {start}, got {error.start}"
        return error

    return _assert_error


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch, tmp_path):
    """Run each test without a stray .env and with fresh settings."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    close_history_logger()

    # Drop handlers installed by setup_logging; pytest's own handlers stay
    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
