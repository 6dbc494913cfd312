from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from exprcalc.core import CalcError, InvalidExpressionError, MalformedLiteralError, evaluate
from exprcalc.core.evaluator import collapse, divide, reduce_groups


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("2 + 2", 4.0),
        ("(2 + 3) * 4", 20.0),
        ("10.5 - 2.5", 8.0),
        ("3 * (4 + 5) / 2", 13.5),
        ("1 + 2 * 3 - 4 / 2", 5.0),
        ("(1 + 2) * 3 / (4 + 5)", 1.0),
        ("2 + 3 * 4", 14.0),
        ("10 / 4", 2.5),
        ("2 * (3 + 1)", 8.0),
        ("((1+2)*(3+4))", 21.0),
        ("2*(3+(4-1))/3", 4.0),
        ("(((7)))", 7.0),
        ("0.1 + 0.2", 0.1 + 0.2),
    ],
)
def test_evaluate(expression: str, expected: float) -> None:
    assert evaluate(expression) == expected


def test_same_precedence_runs_left_to_right() -> None:
    assert evaluate("8 / 4 / 2") == 1.0
    assert evaluate("2 * 3 * 4") == 24.0
    assert evaluate("100 - 10 - 1") == 89.0
    assert evaluate("12 / 3 * 2") == 8.0


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("3 * -2", -6.0),
        ("-(2+3)", -5.0),
        ("-2 * -2", 4.0),
        ("+5", 5.0),
        ("3 * -(2 + 1)", -9.0),
        ("2 - (0 - 3)", 5.0),
        ("2 - -(3)", 5.0),
        ("-(-(2))", 2.0),
        ("-+-(2)", 2.0),
        ("(2) * -(3)", -6.0),
    ],
)
def test_unary_signs(expression: str, expected: float) -> None:
    assert evaluate(expression) == expected


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("2+++3", 5.0),
        ("2---3", -1.0),
        ("2+--3", 5.0),
        ("--3", 3.0),
    ],
)
def test_chained_signs(expression: str, expected: float) -> None:
    assert evaluate(expression) == expected


def test_division_by_zero_follows_ieee() -> None:
    assert evaluate("1 / 0") == math.inf
    assert evaluate("-1 / 0") == -math.inf
    assert evaluate("1 / (-0)") == -math.inf
    assert math.isnan(evaluate("0 / 0"))
    assert math.isnan(evaluate("1/0 - 1/0"))
    assert math.isnan(evaluate("(1/0) * 0"))


def test_small_group_values_feed_outer_level() -> None:
    assert evaluate("2 - (1 / 100000)") == 2 - 1e-05
    assert evaluate("(1/0) + 1") == math.inf


def test_whitespace_does_not_change_result() -> None:
    assert evaluate(" ( 2 + 3 ) *\t4 ") == evaluate("(2+3)*4")


def test_evaluate_is_idempotent() -> None:
    expression = "(1.1 + 2.2) * 3.3 / 7"
    assert evaluate(expression) == evaluate(expression)


def test_concurrent_calls_match_sequential() -> None:
    expressions = ["2 + 3 * 4", "(2 + 3) * 4", "8 / 4 / 2", "3 * -2", "-(2+3)"] * 20
    expected = [evaluate(expression) for expression in expressions]
    with ThreadPoolExecutor(max_workers=8) as pool:
        assert list(pool.map(evaluate, expressions)) == expected


@pytest.mark.parametrize("expression", ["2 + ", "* 2 + 3", "2..5 + 3", "2 + 3a", "(2 + 3", "", None])
def test_invalid_expression_raises(expression: str | None) -> None:
    with pytest.raises(InvalidExpressionError) as excinfo:
        evaluate(expression)
    assert excinfo.value.expression == expression
    assert isinstance(excinfo.value, CalcError)
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("expression", ["2(3)", "(2)3", "(2)(3)", "()", "(*2)"])
def test_validator_gaps_raise_internal_error(expression: str) -> None:
    with pytest.raises(MalformedLiteralError) as excinfo:
        evaluate(expression)
    assert not isinstance(excinfo.value, CalcError)


def test_reduce_groups_keeps_outer_characters() -> None:
    assert reduce_groups("2*(3+4)-1") == ["2", "*", 7.0, "-", "1"]
    assert reduce_groups("(1)+(2)") == [1.0, "+", 2.0]


def test_reduce_groups_rejects_unbalanced_text() -> None:
    with pytest.raises(MalformedLiteralError):
        reduce_groups("((1)")
    with pytest.raises(MalformedLiteralError):
        reduce_groups("1)+(2")


def test_collapse_evaluates_one_level() -> None:
    assert collapse(["2", "*", 7.0, "-", "1"]) == 13.0


def test_deep_nesting_does_not_exhaust_the_stack() -> None:
    depth = 1000
    assert evaluate("(" * depth + "1" + ")" * depth) == 1.0
    assert evaluate("-(" * depth + "2" + ")" * depth) == 2.0
    assert evaluate("(" * depth + "2*3" + ")" * depth + "+1") == 7.0


def test_divide() -> None:
    assert divide(10.0, 4.0) == 2.5
    assert divide(1.0, 0.0) == math.inf
    assert divide(-1.0, 0.0) == -math.inf
    assert divide(1.0, -0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))
    assert math.isnan(divide(math.nan, 0.0))
