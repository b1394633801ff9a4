"""Public wheel input event types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WheelEvent:
    """Wheel event in canvas coordinates with millisecond timestamp."""

    x: float
    y: float
    dy: float
    dx: float = 0.0
    timestamp_ms: int = 0
    delta_mode: int = 0


@dataclass(frozen=True, slots=True)
class ScrollDelta:
    """Primary-axis delta retained in the classifier history window."""

    delta_y: float
    timestamp_ms: int


@dataclass(frozen=True, slots=True)
class ClassifiedWheel:
    """Wheel event paired with its device classification."""

    event: WheelEvent
    is_trackpad: bool
    detected_detent: int | None = None


__all__ = ["ClassifiedWheel", "ScrollDelta", "WheelEvent"]
