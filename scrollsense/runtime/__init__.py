"""Runtime configuration and logging."""

from scrollsense.runtime.config import (
    ClassifierConfig,
    load_classifier_config,
    load_logging_config,
    resolve_log_level_name,
)
from scrollsense.runtime.logging import configure_logging, setup_logging

__all__ = [
    "ClassifierConfig",
    "configure_logging",
    "load_classifier_config",
    "load_logging_config",
    "resolve_log_level_name",
    "setup_logging",
]
