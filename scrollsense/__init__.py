"""Wheel event classification for interactive canvases."""

from scrollsense.api.input_events import ClassifiedWheel, ScrollDelta, WheelEvent
from scrollsense.input.gesture_classifier import ClassifierSettings, GestureClassifier
from scrollsense.input.input_controller import WheelInputController

__all__ = [
    "ClassifiedWheel",
    "ClassifierSettings",
    "GestureClassifier",
    "ScrollDelta",
    "WheelEvent",
    "WheelInputController",
]
