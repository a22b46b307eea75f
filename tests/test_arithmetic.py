import logging
import math

import pytest

from infixcalc.context import EvaluationContext
from infixcalc.parser import to_postfix
from infixcalc.runtime import calculate, evaluate
from infixcalc.tokenizer import tokenize


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("3+4", 7.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("3+4*2", 11.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("8-3-2", 3.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("1.5 * 2", 3.0),
        pytest.param(".5 + .5", 1.0),
        # power
        pytest.param("5^2", 25.0),
        pytest.param("2^3^2", 64.0),
        pytest.param("2^3*2", 16.0),
        pytest.param("2*3^2", 18.0),
        pytest.param("16^(1/2)", 4.0),
        # variables
        pytest.param("x", 5.0),
        pytest.param("x + y", 7.0),
        pytest.param("pi", 3.1415926535),
        pytest.param("e", 2.7182818284),
        # implicit multiplication
        pytest.param("2x", 10.0),
        pytest.param("2 x", 10.0),
        pytest.param("2(3+4)", 14.0),
        pytest.param("x(y)", 10.0),
        pytest.param("(x+1)(y-1)", 6.0),
        pytest.param("3x^2", 75.0),
        # funcs
        pytest.param("sqrt(16)", 4.0),
        pytest.param("sqrt(9) + 1", 4.0),
        pytest.param("sqrt 16 + 9", 13.0),
        pytest.param("sqrt(sqrt(16))", 2.0),
        pytest.param("sqrt(4)(2)", 4.0),
        pytest.param("sin(90)", 1.0),
        pytest.param("cos(60)", 0.5),
        pytest.param("sin(30) + cos(60)", 1.0),
        pytest.param("log(1000)", 3.0),
        pytest.param("2 * log(100)", 4.0),
        # a closing bracket without a pair flushes the operator stack
        pytest.param("3+4)", 7.0),
        pytest.param("3+4)*2", 14.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float, context: EvaluationContext) -> None:
    tokens = tokenize(code, context)
    postfix = to_postfix(tokens, context)
    assert evaluate(postfix, context) == pytest.approx(expected_ret_val)


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("2^3^2", 512.0),
        pytest.param("(2^3)^2", 64.0),
        pytest.param("2^3*2", 16.0),
        pytest.param("2*3^2", 18.0),
        pytest.param("2^2^3 - 1", 255.0),
    ],
)
def test_right_associative_power(code: str, expected_ret_val: float) -> None:
    context = EvaluationContext(power_right_associative=True)
    assert calculate(code, context) == pytest.approx(expected_ret_val)


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1/0", math.inf),
        pytest.param("0-1/0", -math.inf),
        pytest.param("(0-1)/0", -math.inf),
        pytest.param("10^400", math.inf),
        pytest.param("(0-10)^401", -math.inf),
        pytest.param("0^(0-1)", math.inf),
        pytest.param("10^(0-400)", 0.0),
        pytest.param("log(0)", -math.inf),
        pytest.param("(0*(0-1))^(0-1)", -math.inf),
        pytest.param("(0*(0-1))^(0-2)", math.inf),
    ],
)
def test_float_semantics(code: str, expected_ret_val: float) -> None:
    assert calculate(code) == expected_ret_val


@pytest.mark.parametrize(
    "code",
    [
        pytest.param("0/0"),
        pytest.param("(0-8)^(1/3)"),
        pytest.param("sqrt(0-1)"),
        pytest.param("log(0-1)"),
        pytest.param("sin(10^400)"),
        pytest.param("cos(10^400)"),
        pytest.param("cos(0-10^400)"),
        pytest.param("1/0 - 1/0"),
    ],
)
def test_float_semantics_nan(code: str) -> None:
    assert math.isnan(calculate(code))


def test_calculate_uses_default_context() -> None:
    assert calculate("2pi") == pytest.approx(2 * 3.1415926535)


def test_repeated_runs_give_identical_results(context: EvaluationContext) -> None:
    code = "3x^2 + sqrt(16)(y) - log(100)"
    results = [calculate(code, context) for _ in range(3)]
    assert results == [results[0]] * 3


def test_custom_function() -> None:
    context = EvaluationContext()
    context.register_function("cube", lambda x: x**3)
    assert calculate("cube(3)", context) == 27.0
    assert calculate("cube(1 + 1) + 1", context) == 9.0


def test_rebinding_variable_between_runs(context: EvaluationContext) -> None:
    assert calculate("2x", context) == 10.0
    context.bind_variable("x", 7)
    assert calculate("2x", context) == 14.0


def test_overflow_from_operator_is_not_a_malformed_numeral() -> None:
    assert calculate("10^400") == math.inf
    assert calculate("1" + "0" * 300 + " * 1" + "0" * 300) == math.inf


def test_debug_log_shows_postfix(caplog: pytest.LogCaptureFixture, context: EvaluationContext) -> None:
    caplog.set_level(logging.DEBUG, logger="infixcalc")
    calculate("2x + 1", context)
    assert "Postfix: 2 x * 1 +" in caplog.text
    assert "2 x * 1 + => 11.0" in caplog.text


def test_log_messages_not_formatted_without_debug(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch, context: EvaluationContext
) -> None:
    def fail(tokens):
        raise AssertionError("formatted a disabled log record")

    caplog.set_level(logging.WARNING, logger="infixcalc")
    monkeypatch.setattr("infixcalc.parser.untokenize", fail)
    monkeypatch.setattr("infixcalc.runtime.untokenize", fail)
    assert calculate("2x + 1", context) == 11.0
