"""Expression validation and evaluation."""

from exprcalc.core.errors import CalcError, InvalidExpressionError, MalformedLiteralError
from exprcalc.core.evaluator import evaluate
from exprcalc.core.validator import is_valid

__all__ = [
    "CalcError",
    "InvalidExpressionError",
    "MalformedLiteralError",
    "evaluate",
    "is_valid",
]
