"""Wheel event classification: discrete mouse wheel vs. continuous trackpad.

No hardware signal tells the two devices apart, so each event is judged from
a short history of recent deltas:

1. a consistent step size (detent) across the history window means a wheel;
2. two-axis or fractional deltas mean a trackpad;
3. events shortly after a trackpad event continue that gesture;
4. otherwise small magnitudes mean a trackpad and large ones a wheel.

All timing is driven by event timestamps, never wall-clock time.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from scrollsense.api.input_events import ScrollDelta, WheelEvent
from scrollsense.runtime.config import DEFAULT_TRACKPAD_THRESHOLD, ClassifierConfig

WINDOW_MS = 500
TRACKPAD_MAX_GAP_MS = 200
MIN_DETENT_VALUE = 5
MIN_SAMPLES_FOR_DETENT = 3

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class ClassifierSettings:
    """Live tunables shared by reference between host and classifiers."""

    trackpad_threshold: float = DEFAULT_TRACKPAD_THRESHOLD
    detent_detection_enabled: bool = True

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> ClassifierSettings:
        """Build live settings seeded from loaded configuration."""
        return cls(
            trackpad_threshold=config.trackpad_threshold,
            detent_detection_enabled=config.detent_detection_enabled,
        )


@dataclass(frozen=True, slots=True)
class ClassifierSnapshot:
    """Immutable diagnostics view of classifier state."""

    detected_detent: int | None
    history: tuple[ScrollDelta, ...]
    last_trackpad_timestamp_ms: int | None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _step_sizes(deltas: Iterable[float]) -> list[int]:
    steps: list[int] = []
    for delta in deltas:
        if not math.isfinite(delta):
            continue
        step = abs(_round_half_up(delta))
        if step > 0:
            steps.append(step)
    return steps


def gcd_of(values: Iterable[float]) -> int:
    """Return GCD of rounded absolute values, or 0 for an empty input."""
    return math.gcd(*_step_sizes(values))


def _is_integral(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer()


class GestureClassifier:
    """Per-surface wheel classifier; ``classify`` returns True for trackpad input."""

    def __init__(self, settings: ClassifierSettings | None = None) -> None:
        self._settings = settings if settings is not None else ClassifierSettings()
        self._history: deque[ScrollDelta] = deque()
        self._detected_detent: int | None = None
        self._last_trackpad_event: WheelEvent | None = None

    @property
    def settings(self) -> ClassifierSettings:
        return self._settings

    @property
    def detected_detent(self) -> int | None:
        """Step size inferred from the current history window, if any."""
        return self._detected_detent

    @property
    def history(self) -> tuple[ScrollDelta, ...]:
        """Recent deltas, oldest first. Diagnostics only."""
        return tuple(self._history)

    @property
    def last_trackpad_event(self) -> WheelEvent | None:
        return self._last_trackpad_event

    def classify(self, event: WheelEvent) -> bool:
        """Classify one wheel event and update history and continuation state."""
        timestamp_ms = int(event.timestamp_ms)
        self._ingest(ScrollDelta(delta_y=float(event.dy), timestamp_ms=timestamp_ms))

        if self._update_detent() is not None:
            return False

        if self._is_trackpad(event, timestamp_ms):
            self._last_trackpad_event = event
            return True
        return False

    def reset(self) -> None:
        """Forget history, continuation marker and detected detent."""
        self._history.clear()
        self._detected_detent = None
        self._last_trackpad_event = None

    def snapshot(self) -> ClassifierSnapshot:
        last = self._last_trackpad_event
        return ClassifierSnapshot(
            detected_detent=self._detected_detent,
            history=tuple(self._history),
            last_trackpad_timestamp_ms=None if last is None else int(last.timestamp_ms),
        )

    def _ingest(self, delta: ScrollDelta) -> None:
        # Age is measured against the incoming event, not the wall clock.
        self._history = deque(
            entry
            for entry in self._history
            if delta.timestamp_ms - entry.timestamp_ms < WINDOW_MS
        )
        self._history.append(delta)

    def _update_detent(self) -> int | None:
        previous = self._detected_detent
        detent: int | None = None
        if (
            self._settings.detent_detection_enabled
            and len(self._history) >= MIN_SAMPLES_FOR_DETENT
        ):
            steps = _step_sizes(entry.delta_y for entry in self._history)
            if len(steps) >= 2:
                value = math.gcd(*steps)
                if value >= MIN_DETENT_VALUE:
                    detent = value
        self._detected_detent = detent
        if detent != previous:
            _LOG.debug("wheel_detent_changed previous=%s current=%s", previous, detent)
        return detent

    def _is_trackpad(self, event: WheelEvent, timestamp_ms: int) -> bool:
        dy = float(event.dy)
        if float(event.dx) != 0.0:
            return True
        if not _is_integral(dy):
            return True
        last = self._last_trackpad_event
        if last is not None and timestamp_ms - int(last.timestamp_ms) < TRACKPAD_MAX_GAP_MS:
            return True
        return abs(dy) < self._settings.trackpad_threshold


__all__ = [
    "DEFAULT_TRACKPAD_THRESHOLD",
    "MIN_DETENT_VALUE",
    "MIN_SAMPLES_FOR_DETENT",
    "TRACKPAD_MAX_GAP_MS",
    "WINDOW_MS",
    "ClassifierSettings",
    "ClassifierSnapshot",
    "GestureClassifier",
    "gcd_of",
]
