"""Public scrollsense API contracts."""

from scrollsense.api.input_events import ClassifiedWheel, ScrollDelta, WheelEvent
from scrollsense.api.logging import LoggingConfig

__all__ = ["ClassifiedWheel", "LoggingConfig", "ScrollDelta", "WheelEvent"]
