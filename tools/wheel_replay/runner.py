"""Wheel replay runner: feed recorded wheel events through the classifier."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from scrollsense.api.input_events import ClassifiedWheel, WheelEvent
from scrollsense.input.gesture_classifier import ClassifierSettings, GestureClassifier
from scrollsense.window.rendercanvas_wheel import parse_wheel_event


class ReplayFormatError(ValueError):
    """Raised when a wheel recording line cannot be parsed."""


@dataclass(frozen=True)
class ReplaySummary:
    total_events: int
    trackpad_count: int
    wheel_count: int
    last_detected_detent: int | None


def load_wheel_events(path: Path) -> list[WheelEvent]:
    """Parse a JSON-lines wheel recording; blank lines are skipped."""
    events: list[WheelEvent] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                payload = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ReplayFormatError(f"line {line_no}: invalid JSON ({exc.msg})") from exc
            if not isinstance(payload, dict):
                raise ReplayFormatError(f"line {line_no}: expected a JSON object")
            event = parse_wheel_event({"event_type": "wheel", "x": 0.0, "y": 0.0, **payload})
            if event is None:
                raise ReplayFormatError(f"line {line_no}: missing or non-numeric wheel fields")
            events.append(event)
    return events


def replay_wheel_events(
    events: Iterable[WheelEvent],
    settings: ClassifierSettings | None = None,
) -> list[ClassifiedWheel]:
    classifier = GestureClassifier(settings)
    results: list[ClassifiedWheel] = []
    for event in events:
        is_trackpad = classifier.classify(event)
        results.append(
            ClassifiedWheel(
                event=event,
                is_trackpad=is_trackpad,
                detected_detent=classifier.detected_detent,
            )
        )
    return results


def summarize(results: Iterable[ClassifiedWheel]) -> ReplaySummary:
    items = list(results)
    trackpad = sum(1 for item in items if item.is_trackpad)
    return ReplaySummary(
        total_events=len(items),
        trackpad_count=trackpad,
        wheel_count=len(items) - trackpad,
        last_detected_detent=items[-1].detected_detent if items else None,
    )


def result_to_dict(result: ClassifiedWheel) -> dict[str, object]:
    event = result.event
    return {
        "timestamp_ms": event.timestamp_ms,
        "dy": event.dy,
        "dx": event.dx,
        "device": "trackpad" if result.is_trackpad else "wheel",
        "detected_detent": result.detected_detent,
    }
