"""Wheel input capture and device classification."""

from scrollsense.api.input_events import ClassifiedWheel, ScrollDelta, WheelEvent
from scrollsense.input.gesture_classifier import (
    ClassifierSettings,
    ClassifierSnapshot,
    GestureClassifier,
    gcd_of,
)
from scrollsense.input.input_controller import WheelInputController

__all__ = [
    "ClassifiedWheel",
    "ClassifierSettings",
    "ClassifierSnapshot",
    "GestureClassifier",
    "ScrollDelta",
    "WheelEvent",
    "WheelInputController",
    "gcd_of",
]
