from __future__ import annotations

from typing import Final

INVALID_EXPRESSION_TEXT: Final[str] = "Invalid expression"
TOO_LONG_TEXT: Final[str] = "Expression is too long"
INTERNAL_ERROR_TEXT: Final[str] = "Internal error while evaluating the expression"


def map_error_text(kind: str) -> str:
    normalized = kind.strip().lower()
    if normalized == "invalid_expression":
        return INVALID_EXPRESSION_TEXT
    if normalized == "too_long":
        return TOO_LONG_TEXT
    return INTERNAL_ERROR_TEXT
