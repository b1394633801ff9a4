"""Rendercanvas-backed wheel event source."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from scrollsense.api.input_events import WheelEvent

_LOG = logging.getLogger(__name__)


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas backend loop with API-compatible fallbacks."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_fn = getattr(rc_auto, "run", None)
    if callable(run_fn):
        run_fn()
        return
    raise RuntimeError("rendercanvas.auto does not expose loop.run() or run().")


def stop_backend_loop(rc_auto: Any) -> None:
    """Stop rendercanvas backend loop when supported."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "stop"):
        loop.stop()


@dataclass(slots=True)
class RenderCanvasWheelSource:
    """Collect wheel events from an existing rendercanvas canvas."""

    canvas: Any
    _wheel_events: deque[WheelEvent] = field(default_factory=deque)
    _rc_auto: Any | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        add_handler = getattr(self.canvas, "add_event_handler", None)
        if not callable(add_handler):
            raise RuntimeError("Canvas does not support event handlers.")
        add_handler(self._on_wheel, "wheel")

    def poll_wheel_events(self) -> tuple[WheelEvent, ...]:
        drained = tuple(self._wheel_events)
        self._wheel_events.clear()
        return drained

    def run_loop(self) -> None:
        if self._rc_auto is None:
            return
        run_backend_loop(self._rc_auto)

    def stop_loop(self) -> None:
        if self._rc_auto is None:
            return
        stop_backend_loop(self._rc_auto)

    def close(self) -> None:
        self.stop_loop()
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()

    def _on_wheel(self, event: object) -> None:
        parsed = parse_wheel_event(event)
        if parsed is None:
            _LOG.debug("wheel_event_dropped payload=%r", event)
            return
        self._wheel_events.append(parsed)
        request_draw = getattr(self.canvas, "request_draw", None)
        if callable(request_draw):
            request_draw()


def create_rendercanvas_wheel_source(
    canvas: Any | None = None,
    *,
    width: int = 800,
    height: int = 600,
    title: str = "scrollsense",
) -> RenderCanvasWheelSource:
    """Create wheel source over an existing or newly created rendercanvas canvas."""
    if canvas is not None:
        return RenderCanvasWheelSource(canvas=canvas)
    try:
        import rendercanvas.auto as rc_auto
    except Exception as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw or pyside6."
        ) from exc
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    canvas = canvas_cls(size=(int(width), int(height)), title=title)
    return RenderCanvasWheelSource(canvas=canvas, _rc_auto=rc_auto)


def parse_wheel_event(event: object) -> WheelEvent | None:
    """Normalize a dict or attribute-style wheel payload; None when malformed."""
    if str(_event_value(event, "event_type", "")) != "wheel":
        return None
    x = _event_value(event, "x")
    y = _event_value(event, "y")
    dy = _event_value(event, "dy")
    if (
        not isinstance(x, (int, float))
        or not isinstance(y, (int, float))
        or not isinstance(dy, (int, float))
    ):
        return None
    dx = _event_value(event, "dx", 0.0)
    if not isinstance(dx, (int, float)):
        dx = 0.0
    delta_mode = _event_value(event, "delta_mode", 0)
    if not isinstance(delta_mode, int):
        delta_mode = 0
    return WheelEvent(
        x=float(x),
        y=float(y),
        dy=float(dy),
        dx=float(dx),
        timestamp_ms=_timestamp_ms(event),
        delta_mode=delta_mode,
    )


def _timestamp_ms(event: object) -> int:
    value = _event_value(event, "timestamp_ms")
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    # rendercanvas reports time_stamp in seconds.
    seconds = _event_value(event, "time_stamp")
    if isinstance(seconds, (int, float)) and math.isfinite(seconds):
        return int(round(float(seconds) * 1000.0))
    return 0


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)


__all__ = [
    "RenderCanvasWheelSource",
    "create_rendercanvas_wheel_source",
    "parse_wheel_event",
    "run_backend_loop",
    "stop_backend_loop",
]
