"""Interactive read loop around the core.

The shell only reads, dispatches and prints: every line goes through
is_valid() then evaluate(), and the outcome is rendered from a CalcResult.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from exprcalc.core import CalcError, MalformedLiteralError, evaluate, is_valid
from exprcalc.core.error_messages import map_error_text
from exprcalc.core.result import CalcResult, error, ok, refused
from exprcalc.infra.config import Settings
from exprcalc.infra.events import describe_text, elapsed_ms, log_error, log_event

LOGGER = logging.getLogger(__name__)

BANNER = (
    "=== ARITHMETIC EXPRESSION CALCULATOR ===",
    "Supported operations: +, -, *, /, parentheses ()",
    "Type 'exit' to quit",
)
GOODBYE = "Bye."

_INTENT = "calc.evaluate"


def is_exit_command(line: str) -> bool:
    return line.strip().lower() == "exit"


def handle_line(line: str, *, max_length: int = 0) -> CalcResult | None:
    """Evaluate one input line; None for blank input.

    max_length of 0 disables the length check.
    """
    expression = line.strip()
    if not expression:
        return None
    start_time = time.monotonic()
    text_info = describe_text(expression)
    if max_length and len(expression) > max_length:
        log_event(
            LOGGER,
            component="shell",
            event="calc.too_long",
            status="refused",
            expression=text_info,
            max_length=max_length,
        )
        return refused(map_error_text("too_long"), intent=_INTENT)
    if not is_valid(expression):
        return _invalid(start_time, text_info)
    try:
        value = evaluate(expression)
    except CalcError:
        return _invalid(start_time, text_info)
    except MalformedLiteralError as exc:
        log_error(
            LOGGER,
            component="shell",
            where="handle_line",
            exc=exc,
            extra={"expression": text_info},
        )
        return error(
            map_error_text("internal"),
            intent=_INTENT,
            debug={"literal": exc.literal},
        )
    log_event(
        LOGGER,
        component="shell",
        event="calc.ok",
        duration_ms=elapsed_ms(start_time),
        expression=text_info,
    )
    return ok(value, intent=_INTENT)


def _invalid(start_time: float, text_info: dict[str, object]) -> CalcResult:
    log_event(
        LOGGER,
        component="shell",
        event="calc.invalid",
        status="invalid",
        duration_ms=elapsed_ms(start_time),
        expression=text_info,
    )
    return error(map_error_text("invalid_expression"), intent=_INTENT)


def run_shell(
    settings: Settings,
    *,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """Run the loop until 'exit', end of input or Ctrl-C.

    Returns the number of lines that produced a result.
    """
    if settings.show_banner:
        for banner_line in BANNER:
            output_fn(banner_line)
    handled = 0
    while True:
        try:
            line = input_fn(settings.prompt)
        except (EOFError, KeyboardInterrupt):
            break
        if is_exit_command(line):
            break
        result = handle_line(line, max_length=settings.max_expression_length)
        if result is None:
            continue
        handled += 1
        output_fn(result.render())
    output_fn(GOODBYE)
    LOGGER.info("shell.stopped handled=%s", handled)
    return handled
