from __future__ import annotations


class CalcError(ValueError):
    """Raised when an expression cannot be evaluated."""


class InvalidExpressionError(CalcError):
    """Raised by evaluate() when the validator rejects the input."""

    def __init__(self, expression: str | None) -> None:
        self.expression = expression
        super().__init__(f"Invalid expression: {expression!r}")


class MalformedLiteralError(RuntimeError):
    """A numeric literal that passed validation but float() rejects.

    Signals a validator bug, so it is not a CalcError.
    """

    def __init__(self, literal: str) -> None:
        self.literal = literal
        super().__init__(f"Malformed numeric literal: {literal!r}")
