"""Canvas wheel capture feeding the per-surface gesture classifier."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from typing import Any

from scrollsense.api.input_events import ClassifiedWheel, WheelEvent
from scrollsense.input.gesture_classifier import ClassifierSettings, GestureClassifier
from scrollsense.runtime.config import load_classifier_config
from scrollsense.window.rendercanvas_wheel import parse_wheel_event

logger = logging.getLogger(__name__)


class WheelInputController:
    """Classify wheel events from one canvas and queue results for the app loop."""

    def __init__(
        self,
        settings: ClassifierSettings | None = None,
        *,
        on_wheel_queued: Callable[[], None] | None = None,
        trace_enabled: bool | None = None,
    ) -> None:
        if settings is None or trace_enabled is None:
            config = load_classifier_config()
            if settings is None:
                settings = ClassifierSettings.from_config(config)
            if trace_enabled is None:
                trace_enabled = config.input_trace_enabled
        self._classifier = GestureClassifier(settings)
        self._classified: deque[ClassifiedWheel] = deque()
        self._on_wheel_queued = on_wheel_queued
        self._trace = bool(trace_enabled)

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier

    def bind(self, canvas: Any) -> None:
        """Attach the wheel listener to a canvas."""
        if not hasattr(canvas, "add_event_handler"):
            raise RuntimeError("Canvas does not support event handlers.")
        canvas.add_event_handler(self._on_wheel, "wheel")

    def consume_wheel_events(self, events: Iterable[object]) -> None:
        """Ingest wheel events polled from a window adapter."""
        for raw in events:
            if isinstance(raw, WheelEvent):
                self._ingest(raw)

    def drain_classified(self) -> list[ClassifiedWheel]:
        """Return and clear classified wheel events."""
        items = list(self._classified)
        self._classified.clear()
        return items

    def _ingest(self, event: WheelEvent) -> None:
        is_trackpad = self._classifier.classify(event)
        item = ClassifiedWheel(
            event=event,
            is_trackpad=is_trackpad,
            detected_detent=self._classifier.detected_detent,
        )
        self._classified.append(item)
        if self._trace:
            logger.debug(
                "wheel_classified dy=%.3f dx=%.3f t=%d trackpad=%s detent=%s",
                event.dy,
                event.dx,
                event.timestamp_ms,
                is_trackpad,
                item.detected_detent,
            )
        if self._on_wheel_queued is not None:
            self._on_wheel_queued()

    def _on_wheel(self, event: object) -> None:
        parsed = parse_wheel_event(event)
        if parsed is not None:
            self._ingest(parsed)
