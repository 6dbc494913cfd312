"""Shell result contract: CalcResult and builders.

Every line the shell evaluates produces a CalcResult (text, status, intent,
value, debug). ok() / refused() / error() build results; render() turns
one into the line printed to the user.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Literal

ResultStatus = Literal["ok", "refused", "error"]

_STATUSES = {"ok", "refused", "error"}


@dataclass(frozen=True)
class CalcResult:
    """Outcome of one shell line: text, status, intent, value, debug."""

    text: str
    status: ResultStatus
    intent: str
    value: float | None = None
    debug: dict[str, Any] = field(default_factory=dict)

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "status": self.status,
            "intent": self.intent,
            "value": _json_number(self.value),
        }

    def to_log_dict(self) -> dict[str, Any]:
        payload = self.to_public_dict()
        payload["debug"] = self.debug
        return payload

    def to_public_json(self) -> str:
        return _json_dumps(self.to_public_dict())

    def render(self) -> str:
        if self.status == "ok":
            return f"Result: {self.text}"
        return f"ERROR: {self.text}"

    def validate(self) -> None:
        errors = []
        if not isinstance(self.text, str):
            errors.append("text must be str")
        if self.status not in _STATUSES:
            errors.append("status must be ok/refused/error")
        if not isinstance(self.intent, str) or "." not in self.intent:
            errors.append("intent must include namespace.action")
        if self.status == "ok" and not isinstance(self.value, float):
            errors.append("ok result must carry a float value")
        if self.status != "ok" and self.value is not None:
            errors.append("only ok results carry a value")
        if not isinstance(self.debug, dict):
            errors.append("debug must be dict")
        if errors:
            raise ValueError("; ".join(errors))


def ok(value: float, intent: str, *, debug: dict[str, Any] | None = None) -> CalcResult:
    """Build CalcResult with status='ok'; text is repr(value)."""
    return CalcResult(
        text=repr(value),
        status="ok",
        intent=intent,
        value=value,
        debug=debug or {},
    )


def refused(text: str, intent: str, *, debug: dict[str, Any] | None = None) -> CalcResult:
    """Build CalcResult with status='refused' (input rejected before evaluation)."""
    return CalcResult(text=text, status="refused", intent=intent, debug=debug or {})


def error(text: str, intent: str, *, debug: dict[str, Any] | None = None) -> CalcResult:
    """Build CalcResult with status='error'."""
    return CalcResult(text=text, status="error", intent=intent, debug=debug or {})


def _json_number(value: float | None) -> float | str | None:
    # JSON has no inf/nan
    if value is None or math.isfinite(value):
        return value
    return repr(value)


def _json_dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, default=str)
