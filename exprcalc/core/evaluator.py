"""Arithmetic evaluation with IEEE-754 double semantics.

Parenthesis groups are reduced innermost-first, left to right; the flat
remainder is tokenized, then collapsed by a multiplication/division pass and
an addition/subtraction pass, both strictly left to right. Division by zero
is not an error: it yields inf, -inf or nan like any IEEE-754 division.
"""

from __future__ import annotations

import logging
import math
import operator
from typing import Callable

from exprcalc.core.errors import InvalidExpressionError, MalformedLiteralError
from exprcalc.core.tokenizer import Token, strip_whitespace, tokenize
from exprcalc.core.validator import is_valid

LOGGER = logging.getLogger(__name__)


def divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_MULTIPLICATIVE: dict[str, Callable[[float, float], float]] = {
    "*": operator.mul,
    "/": divide,
}
_ADDITIVE: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
}


def evaluate(expression: str | None) -> float:
    """Validate and evaluate an expression.

    Raises:
        InvalidExpressionError: the validator rejects the expression.
        MalformedLiteralError: an internal inconsistency between the
            validator and the evaluator.
    """
    if not is_valid(expression):
        raise InvalidExpressionError(expression)
    value = evaluate_flat(strip_whitespace(expression))
    LOGGER.debug("calc.evaluate ok length=%s result=%r", len(expression), value)
    return value


def evaluate_flat(expr: str) -> float:
    """Evaluate a whitespace-free expression without validating it."""
    return collapse(reduce_groups(expr))


def collapse(parts: list[str | float]) -> float:
    """Evaluate one parenthesis-free level."""
    tokens = tokenize(parts)
    return _apply_additive(_apply_multiplicative(tokens))


def reduce_groups(expr: str) -> list[str | float]:
    """Replace each top-level parenthesis group by its value.

    Open groups are kept on an explicit stack of levels. A group is collapsed
    when its ')' is read, so inner groups are reduced before the group that
    holds them and sibling groups go left to right. The result is the
    characters outside the groups, in order, with one float per group.
    """
    levels: list[list[str | float]] = [[]]
    for char in expr:
        if char == "(":
            levels.append([])
        elif char == ")":
            if len(levels) == 1:
                raise MalformedLiteralError(expr)
            value = collapse(levels.pop())
            levels[-1].append(value)
        else:
            levels[-1].append(char)
    if len(levels) != 1:
        raise MalformedLiteralError(expr)
    return levels[0]


def _apply_multiplicative(tokens: list[Token]) -> list[Token]:
    result = list(tokens)
    _operand_at(result, 0)
    index = 1
    while index < len(result):
        op = result[index]
        right = _operand_at(result, index + 1)
        func = _MULTIPLICATIVE.get(op) if isinstance(op, str) else None
        if func is None:
            index += 2
            continue
        left = _operand_at(result, index - 1)
        result[index - 1 : index + 2] = [func(left, right)]
    return result


def _apply_additive(tokens: list[Token]) -> float:
    total = _operand_at(tokens, 0)
    for index in range(1, len(tokens), 2):
        op = tokens[index]
        func = _ADDITIVE.get(op) if isinstance(op, str) else None
        if func is None:
            raise MalformedLiteralError(str(op))
        total = func(total, _operand_at(tokens, index + 1))
    return total


def _operand_at(tokens: list[Token], index: int) -> float:
    if index >= len(tokens):
        raise MalformedLiteralError("")
    token = tokens[index]
    if not isinstance(token, float):
        raise MalformedLiteralError(token)
    return token
