"""Command-line entry point for replaying or live-capturing wheel classifications."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scrollsense.input.gesture_classifier import ClassifierSettings  # noqa: E402
from scrollsense.input.input_controller import WheelInputController  # noqa: E402
from scrollsense.runtime.config import load_classifier_config  # noqa: E402
from scrollsense.runtime.logging import setup_logging  # noqa: E402
from scrollsense.window.rendercanvas_wheel import create_rendercanvas_wheel_source  # noqa: E402
from tools.wheel_replay.runner import (  # noqa: E402
    ReplayFormatError,
    load_wheel_events,
    replay_wheel_events,
    result_to_dict,
    summarize,
)

_LOG = logging.getLogger("tools.wheel_replay")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="wheel_replay")
    parser.add_argument("--events", type=Path, default=None, help="Wheel recording (JSON lines).")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Trackpad magnitude threshold (defaults to SCROLLSENSE_TRACKPAD_THRESHOLD or 60).",
    )
    parser.add_argument("--no-detent", action="store_true", help="Disable detent detection.")
    parser.add_argument("--json", action="store_true", help="Emit one JSON object per event.")
    parser.add_argument(
        "--live",
        action="store_true",
        help="Open a rendercanvas window and classify wheel input as it arrives.",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> ClassifierSettings:
    settings = ClassifierSettings.from_config(load_classifier_config())
    if args.threshold is not None:
        settings.trackpad_threshold = max(0.0, float(args.threshold))
    if args.no_detent:
        settings.detent_detection_enabled = False
    return settings


def _run_live(settings: ClassifierSettings, *, as_json: bool) -> int:
    try:
        source = create_rendercanvas_wheel_source(title="scrollsense wheel replay")
    except RuntimeError as exc:
        print(str(exc))
        return 2
    controller = WheelInputController(settings, trace_enabled=False)

    def _draw() -> None:
        controller.consume_wheel_events(source.poll_wheel_events())
        for result in controller.drain_classified():
            _print_result(result_to_dict(result), as_json=as_json)

    request_draw = getattr(source.canvas, "request_draw", None)
    if callable(request_draw):
        request_draw(_draw)
    _LOG.info("live_wheel_capture_started")
    source.run_loop()
    return 0


def _print_result(row: dict[str, object], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(row))
        return
    print(
        f"t={row['timestamp_ms']} dy={row['dy']} dx={row['dx']} "
        f"device={row['device']} detent={row['detected_detent']}"
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    settings = _settings_from_args(args)

    if args.live:
        return _run_live(settings, as_json=args.json)

    if args.events is None:
        print("Either --events <recording.jsonl> or --live is required.")
        return 2
    try:
        events = load_wheel_events(args.events)
    except (OSError, ReplayFormatError) as exc:
        print(f"{args.events}: {exc}")
        return 2

    results = replay_wheel_events(events, settings)
    for result in results:
        _print_result(result_to_dict(result), as_json=args.json)
    summary = summarize(results)
    if not args.json:
        print(f"total_events={summary.total_events}")
        print(f"trackpad={summary.trackpad_count} wheel={summary.wheel_count}")
        print(f"last_detected_detent={summary.last_detected_detent}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
