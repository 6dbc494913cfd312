from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_PROMPT = "Enter expression: "
DEFAULT_MAX_EXPRESSION_LENGTH = 1000


@dataclass(frozen=True)
class Settings:
    log_level: int
    log_file: Path | None
    prompt: str
    max_expression_length: int
    show_banner: bool


def get_log_level(raw_env: Mapping[str, str] | None = None) -> int:
    source = raw_env if raw_env is not None else os.environ
    raw = source.get("LOG_LEVEL", "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        LOGGER.warning("config LOG_LEVEL unknown value=%s; using WARNING", raw)
        return DEFAULT_LOG_LEVEL
    return level


def get_log_file(raw_env: Mapping[str, str] | None = None) -> Path | None:
    source = raw_env if raw_env is not None else os.environ
    raw = (source.get("LOG_FILE") or "").strip()
    if not raw:
        return None
    return Path(raw)


def load_settings(raw_env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from raw_env, or from os.environ after loading .env."""
    if raw_env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env: Mapping[str, str] = os.environ
    else:
        env = raw_env

    prompt = env.get("CALC_PROMPT")
    if prompt is None:
        prompt = DEFAULT_PROMPT
    max_expression_length = _parse_int_with_default(
        env.get("CALC_MAX_EXPRESSION_LENGTH"),
        DEFAULT_MAX_EXPRESSION_LENGTH,
    )
    if max_expression_length < 0:
        raise ValueError("CALC_MAX_EXPRESSION_LENGTH must be >= 0")
    show_banner = _parse_optional_bool(env.get("CALC_SHOW_BANNER"))
    if show_banner is None:
        show_banner = True
    return Settings(
        log_level=get_log_level(env),
        log_file=get_log_file(env),
        prompt=prompt,
        max_expression_length=max_expression_length,
        show_banner=show_banner,
    )


def _parse_optional_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    trimmed = value.strip().lower()
    if not trimmed:
        return None
    return trimmed in {"1", "true", "yes", "on"}


def _parse_int_with_default(value: str | None, default: int) -> int:
    if value is None:
        return default
    trimmed = value.strip()
    if not trimmed:
        return default
    return int(trimmed)
