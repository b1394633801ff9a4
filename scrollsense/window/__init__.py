"""Window subsystem adapters."""

from scrollsense.window.rendercanvas_wheel import (
    RenderCanvasWheelSource,
    create_rendercanvas_wheel_source,
    parse_wheel_event,
)

__all__ = ["RenderCanvasWheelSource", "create_rendercanvas_wheel_source", "parse_wheel_event"]
