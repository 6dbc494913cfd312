"""Tokenizer for parenthesis-free arithmetic expressions.

tokenize() turns a flat sequence of characters (and already reduced
parenthesis-group values) into alternating operands and binary operators.
Unary signs never become tokens: they are folded into the operand they
precede. is_unary_position() is the single rule deciding whether a sign is
unary, both for literals and for the value of a parenthesis group.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from exprcalc.core.errors import MalformedLiteralError

Token = Union[float, str]

DIGITS = frozenset("0123456789")
LITERAL_CHARS = DIGITS | {"."}
SIGNS = frozenset("+-")
OPERATORS = frozenset("+-*/")


def strip_whitespace(expression: str) -> str:
    return "".join(expression.split())


def is_operator(token: Token) -> bool:
    return isinstance(token, str) and token in OPERATORS


def is_unary_position(tokens: Sequence[Token]) -> bool:
    """True when a sign read now belongs to the next operand.

    That is the case at the start of a level (nothing emitted yet) and right
    after a binary operator.
    """
    return not tokens or is_operator(tokens[-1])


def apply_signs(value: float, signs: str) -> float:
    """Fold a run of unary signs by parity: every '-' flips, '+' keeps."""
    if signs.count("-") % 2:
        return -value
    return value


def parse_literal(text: str) -> float:
    if not text or not set(text) <= LITERAL_CHARS:
        raise MalformedLiteralError(text)
    try:
        return float(text)
    except ValueError as exc:
        raise MalformedLiteralError(text) from exc


def tokenize(parts: Iterable[str | float]) -> list[Token]:
    """Split a parenthesis-free expression into operands and operators.

    ``parts`` is a whitespace-free string, or any iterable of single
    characters mixed with float values standing for reduced parenthesis
    groups. Operands in the result are floats carrying their unary sign.

    Raises:
        MalformedLiteralError: a literal float() cannot read, two operands
            with no operator between them, or a trailing sign or operator.
    """
    tokens: list[Token] = []
    literal: list[str] = []
    signs: list[str] = []

    for part in parts:
        if isinstance(part, str) and part not in OPERATORS:
            literal.append(part)
            continue
        if literal:
            text = "".join(literal)
            literal.clear()
            _push_operand(tokens, signs, parse_literal(text), text)
        if isinstance(part, float):
            _push_operand(tokens, signs, part, repr(part))
        elif part in SIGNS and is_unary_position(tokens):
            signs.append(part)
        else:
            tokens.append(part)

    if literal:
        text = "".join(literal)
        _push_operand(tokens, signs, parse_literal(text), text)
    if signs:
        raise MalformedLiteralError("".join(signs))
    if tokens and is_operator(tokens[-1]):
        raise MalformedLiteralError(str(tokens[-1]))
    return tokens


def _push_operand(tokens: list[Token], signs: list[str], value: float, text: str) -> None:
    if tokens and not is_operator(tokens[-1]):
        # e.g. "2(3)": an operand glued to a group value
        raise MalformedLiteralError(f"{tokens[-1]!r}{text}")
    tokens.append(apply_signs(value, "".join(signs)))
    signs.clear()
