"""Tests for the calculate pipeline."""

import io
import random

import pytest

from exprcalc import CalcOptions, calculate
from exprcalc.core.errors import CalcError, ErrorKind
from exprcalc.math.value import Float, Integer
from exprcalc.parser import ast as ast_module


class TestProperties:
    """Test the documented behaviour of the whole pipeline."""

    def test_integer_arithmetic_is_exact(self, calc):
        """Test random integer + - * expressions against Python ints."""
        rng = random.Random(1234)
        for _ in range(200):
            a, b, c = (rng.randint(-10**6, 10**6) for _ in range(3))
            op1, op2 = rng.choice("+-*"), rng.choice("+-*")
            expression = f"{a} {op1} {b} {op2} ({c})"
            assert calc(expression) == Integer(eval(expression))

    def test_division_always_float(self, calc):
        """Test 6 / 2 is Float(3.0)."""
        assert calc("6 / 2") == Float(3.0)
        assert calc("(10 - 2) / (3 + 1)") == Float(2.0)

    def test_float_modulo(self, assert_calc_error):
        """Test a float operand to % faults even when exact."""
        assert_calc_error("10 % 2.0", ErrorKind.FLOAT_MODULO, start=3)

    def test_power_right_associative(self, calc):
        """Test 2 ^ 3 ^ 2 is 512.0."""
        assert calc("2 ^ 3 ^ 2") == Float(512.0)

    def test_sign_weaker_than_power(self, calc):
        """Test -2 ^ 2 and (-2) ^ 2."""
        assert calc("-2 ^ 2") == Float(-4.0)
        assert calc("(-2) ^ 2") == Float(4.0)

    def test_function_domains(self, calc, assert_calc_error):
        """Test sqrt, log, ln domain faults and pow."""
        assert_calc_error("sqrt(-1)", ErrorKind.INVALID_FUNCTION_ARGUMENT)
        assert_calc_error("log(0)", ErrorKind.INVALID_FUNCTION_ARGUMENT)
        assert_calc_error("ln(0)", ErrorKind.INVALID_FUNCTION_ARGUMENT)
        assert calc("pow(2,3)") == Float(8.0)

    def test_overflow(self, assert_calc_error):
        """Test the largest integer plus one faults."""
        assert_calc_error("9223372036854775807 + 1", ErrorKind.OVERFLOW)

    def test_unknown_identifier_split(self, assert_calc_error):
        """Test foo fails at evaluation and foo(1) at parse time."""
        assert_calc_error("foo", ErrorKind.UNKNOWN_VARIABLE, start=0)
        assert_calc_error("foo(1)", ErrorKind.EXPECTED_PRIMARY, start=0)

    def test_e_after_number(self, assert_calc_error):
        """Test '1e' reaches the parser as a number followed by e."""
        assert_calc_error("1e", ErrorKind.TRAILING_INPUT, start=1)

    def test_long_flat_sum(self, calc):
        """Test operator chains are not limited by the nesting depth."""
        assert calc("+".join(["1"] * 1000)) == Integer(1000)

    def test_long_flat_sum_with_tree(self):
        """Test printing the tree of a long chain."""
        out = io.StringIO()
        result = calculate("+".join(["2"] * 1000), CalcOptions(show_ast=True, max_depth=1), out=out)
        assert result == Integer(2000)
        assert len(out.getvalue().splitlines()) == 1999

    def test_whitespace(self, calc):
        """Test spaces and tabs around tokens."""
        assert calc("  2  +  3  ") == Integer(5)
        assert calc("\t5\t*\t4\t") == Integer(20)
        assert calc(" ( 2 + 3 ) * 4 ") == Integer(20)

    def test_mixed_expression(self, calc):
        """Test functions, constants and operators together."""
        result = calc("2.5 * (3 + 1) / 2 + abs(-1) - cos(pi)")
        assert result.value == pytest.approx(7.0)


class TestErrorKinds:
    """Test each fault kind surfaces from calculate."""

    @pytest.mark.parametrize(
        "expression, kind",
        [
            ("2 $ 3", ErrorKind.INVALID_CHARACTER),
            ("99999999999999999999", ErrorKind.INVALID_NUMBER),
            ("1 +", ErrorKind.EXPECTED_PRIMARY),
            ("(1", ErrorKind.EXPECTED_RPAREN),
            ("1 2", ErrorKind.TRAILING_INPUT),
            ("1 / 0", ErrorKind.DIVISION_BY_ZERO),
            ("1.5 % 1", ErrorKind.FLOAT_MODULO),
            ("9223372036854775807 * 2", ErrorKind.OVERFLOW),
            ("sqrt(-4)", ErrorKind.INVALID_FUNCTION_ARGUMENT),
            ("pow(1)", ErrorKind.WRONG_ARGUMENT_COUNT),
            ("x", ErrorKind.UNKNOWN_VARIABLE),
        ],
    )
    def test_kind(self, expression, kind, assert_calc_error):
        """Test the fault kind for a failing expression."""
        assert_calc_error(expression, kind)

    def test_scan_error_before_parse(self, assert_calc_error):
        """Test a lexical fault wins over a later syntax fault."""
        assert_calc_error("(1 + #", ErrorKind.INVALID_CHARACTER, start=5)

    def test_nesting_limit_option(self):
        """Test max_depth reaches the parser."""
        with pytest.raises(CalcError) as exc_info:
            calculate("((1))", CalcOptions(max_depth=1))
        assert exc_info.value.kind == ErrorKind.NESTING_TOO_DEEP


class TestDebugOutput:
    """Test token and tree printing."""

    def test_show_tokens(self):
        """Test tokens are written one per line."""
        out = io.StringIO()
        result = calculate("1 + (2 * 3)", CalcOptions(show_tokens=True), out=out)
        assert result == Integer(7)
        assert out.getvalue() == "number(1)\nadd\nlparen\nnumber(2)\nmul\nnumber(3)\nrparen\neof\n"

    def test_show_ast(self):
        """Test the tree is written with connectors."""
        out = io.StringIO()
        calculate("-2 ^ 2", CalcOptions(show_ast=True), out=out)
        assert out.getvalue() == "neg\n└── pow\n    ├── number(2)\n    └── number(2)\n"

    def test_tokens_printed_before_parse_error(self):
        """Test tokens are shown even when parsing fails."""
        out = io.StringIO()
        with pytest.raises(CalcError):
            calculate("1 +", CalcOptions(show_tokens=True, show_ast=True), out=out)
        assert out.getvalue() == "number(1)\nadd\neof\n"

    def test_ast_printed_before_evaluation_error(self):
        """Test the tree is shown even when evaluation fails."""
        out = io.StringIO()
        with pytest.raises(CalcError):
            calculate("1 / 0", CalcOptions(show_ast=True), out=out)
        assert out.getvalue().startswith("div\n")

    def test_default_prints_nothing(self, capsys):
        """Test nothing is written without options."""
        calculate("1 + 1")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_default_stream_is_stderr(self, capsys):
        """Test debug output goes to stderr by default."""
        calculate("1", CalcOptions(show_tokens=True))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "number(1)\neof\n"


class TestResources:
    """Test per-call arena ownership."""

    def _spy_arenas(self, monkeypatch):
        arenas = []

        class SpyArena(ast_module.NodeArena):
            def __init__(self):
                super().__init__()
                arenas.append(self)

        monkeypatch.setattr("exprcalc.calculator.NodeArena", SpyArena)
        return arenas

    def test_arena_released_on_success(self, monkeypatch):
        """Test the arena is released after a successful call."""
        arenas = self._spy_arenas(monkeypatch)
        calculate("1 + 2")
        assert len(arenas) == 1
        assert arenas[0].released

    def test_arena_released_on_fault(self, monkeypatch):
        """Test the arena is released when evaluation faults."""
        arenas = self._spy_arenas(monkeypatch)
        with pytest.raises(CalcError):
            calculate("1 / 0")
        assert arenas[0].released

    def test_calls_are_independent(self, monkeypatch):
        """Test each call gets its own arena."""
        arenas = self._spy_arenas(monkeypatch)
        calculate("1")
        calculate("2")
        assert len(arenas) == 2
        assert arenas[0] is not arenas[1]


class TestCalcOptions:
    """Test the options model."""

    def test_defaults(self):
        """Test printing is off by default."""
        options = CalcOptions()
        assert options.show_tokens is False
        assert options.show_ast is False
        assert options.max_depth == 100

    def test_frozen(self):
        """Test options are immutable."""
        options = CalcOptions()
        with pytest.raises(Exception):
            options.show_ast = True  # type: ignore[misc]

    def test_max_depth_must_be_positive(self):
        """Test a zero nesting limit is rejected."""
        with pytest.raises(Exception):
            CalcOptions(max_depth=0)
