"""Centralized environment configuration for classifier and logging."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping

from scrollsense.api.logging import LoggingConfig

DEFAULT_TRACKPAD_THRESHOLD = 60.0


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    trackpad_threshold: float
    detent_detection_enabled: bool
    input_trace_enabled: bool


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if math.isnan(value):
        value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _normalize_log_format(raw: str) -> str:
    value = str(raw).strip().lower()
    if value not in {"text", "json"}:
        return "text"
    return value


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("SCROLLSENSE_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_classifier_config(*, env: Mapping[str, str] | None = None) -> ClassifierConfig:
    return ClassifierConfig(
        trackpad_threshold=_float(
            "SCROLLSENSE_TRACKPAD_THRESHOLD",
            DEFAULT_TRACKPAD_THRESHOLD,
            minimum=0.0,
            env=env,
        ),
        detent_detection_enabled=_flag("SCROLLSENSE_DETENT_DETECTION", True, env=env),
        input_trace_enabled=_flag("SCROLLSENSE_INPUT_TRACE", False, env=env),
    )


def load_logging_config(*, env: Mapping[str, str] | None = None) -> LoggingConfig:
    file_path = _text("SCROLLSENSE_LOG_FILE", "", env=env)
    return LoggingConfig(
        level_name=resolve_log_level_name(env=env),
        console_format=_normalize_log_format(_text("SCROLLSENSE_LOG_FORMAT", "text", env=env)),
        file_path=file_path or None,
        file_format="json",
    )


__all__ = [
    "ClassifierConfig",
    "load_classifier_config",
    "load_logging_config",
    "resolve_log_level_name",
]
