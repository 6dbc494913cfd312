from __future__ import annotations

import logging
from typing import Callable, Iterator

from exprcalc.core.tokenizer import DIGITS, OPERATORS, strip_whitespace

LOGGER = logging.getLogger(__name__)

_ALLOWED_CHARS = DIGITS | frozenset("+-*/().")
_INVALID_FIRST = frozenset("*/)")
_NUMBER_DELIMITERS = OPERATORS | frozenset("()")

# Characters that may not directly follow the key character. Signs may
# follow any operator: they are unary there.
_FORBIDDEN_NEXT: dict[str, frozenset[str]] = {
    "*": frozenset("*/)"),
    "/": frozenset("*/)"),
    "+": frozenset("*/)"),
    "-": frozenset("*/)"),
}


def is_valid(expression: str | None) -> bool:
    """Return True when the expression is well-formed.

    Whitespace is ignored. None and blank input are simply invalid; this
    function never raises for any string.
    """
    if expression is None:
        return False
    expr = strip_whitespace(expression)
    if not expr:
        return False
    for stage, check in _STAGES:
        if not check(expr):
            LOGGER.debug("calc.validate rejected stage=%s length=%s", stage, len(expr))
            return False
    return True


def check_parentheses_balance(expr: str) -> bool:
    depth = 0
    for char in expr:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def check_characters(expr: str) -> bool:
    return all(char in _ALLOWED_CHARS for char in expr)


def check_operators(expr: str) -> bool:
    if expr[0] in _INVALID_FIRST:
        return False
    if expr[-1] in OPERATORS:
        return False
    for current, following in zip(expr, expr[1:]):
        if following in _FORBIDDEN_NEXT.get(current, ()):
            return False
    return True


def check_numbers(expr: str) -> bool:
    for fragment in _iter_fragments(expr):
        if fragment.count(".") > 1:
            return False
        if fragment.startswith(".") or fragment.endswith("."):
            return False
    return True


def _iter_fragments(expr: str) -> Iterator[str]:
    """Yield the non-empty runs between operators and parentheses."""
    start = 0
    for index, char in enumerate(expr):
        if char in _NUMBER_DELIMITERS:
            if index > start:
                yield expr[start:index]
            start = index + 1
    if start < len(expr):
        yield expr[start:]


_STAGES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("parentheses", check_parentheses_balance),
    ("characters", check_characters),
    ("operators", check_operators),
    ("numbers", check_numbers),
)
