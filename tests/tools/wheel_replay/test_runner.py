from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scrollsense.api.input_events import WheelEvent
from scrollsense.input.gesture_classifier import ClassifierSettings
import tools.wheel_replay.main as wheel_replay_main
from tools.wheel_replay.main import _settings_from_args, build_parser, main
from tools.wheel_replay.runner import (
    ReplayFormatError,
    load_wheel_events,
    replay_wheel_events,
    result_to_dict,
    summarize,
)


def _write_recording(path: Path, rows: list[dict[str, object]]) -> Path:
    path.write_text("\n".join(json.dumps(row) for row in rows) + "\n\n", encoding="utf-8")
    return path


def _detent_rows() -> list[dict[str, object]]:
    return [
        {"dy": 10, "timestamp_ms": 100},
        {"dy": 20, "timestamp_ms": 150},
        {"dy": 10, "timestamp_ms": 200},
        {"dy": 40, "timestamp_ms": 250},
    ]


def test_load_wheel_events_parses_lines_and_skips_blanks(tmp_path: Path) -> None:
    path = _write_recording(
        tmp_path / "wheel.jsonl",
        [{"dy": 2.5, "dx": 0.5, "time_stamp": 0.1}, {"dy": -120, "timestamp_ms": 300, "x": 4, "y": 5}],
    )
    events = load_wheel_events(path)
    assert [event.timestamp_ms for event in events] == [100, 300]
    assert events[0].dx == 0.5
    assert (events[1].x, events[1].y) == (4.0, 5.0)


def test_load_wheel_events_reports_bad_line_number(tmp_path: Path) -> None:
    path = tmp_path / "wheel.jsonl"
    path.write_text('{"dy": 1, "timestamp_ms": 1}\n{"dx": 1}\n', encoding="utf-8")
    with pytest.raises(ReplayFormatError, match="line 2"):
        load_wheel_events(path)


def test_load_wheel_events_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "wheel.jsonl"
    path.write_text("[1, 2]\n", encoding="utf-8")
    with pytest.raises(ReplayFormatError, match="line 1"):
        load_wheel_events(path)
    path.write_text("{nope\n", encoding="utf-8")
    with pytest.raises(ReplayFormatError, match="invalid JSON"):
        load_wheel_events(path)


def test_replay_and_summarize_detent_recording(tmp_path: Path) -> None:
    events = load_wheel_events(_write_recording(tmp_path / "wheel.jsonl", _detent_rows()))
    results = replay_wheel_events(events, ClassifierSettings())

    assert [result.is_trackpad for result in results] == [True, True, False, False]
    summary = summarize(results)
    assert summary.total_events == 4
    assert summary.trackpad_count == 2
    assert summary.wheel_count == 2
    assert summary.last_detected_detent == 10
    assert result_to_dict(results[-1])["device"] == "wheel"


def test_summarize_empty_replay() -> None:
    summary = summarize([])
    assert summary.total_events == 0
    assert summary.last_detected_detent is None


def test_main_prints_json_rows(tmp_path: Path, capsys) -> None:
    path = _write_recording(tmp_path / "wheel.jsonl", _detent_rows())
    assert main(["--events", str(path), "--json"]) == 0
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [row["device"] for row in rows] == ["trackpad", "trackpad", "wheel", "wheel"]


def test_main_no_detent_flag_falls_back_to_magnitude(tmp_path: Path, capsys) -> None:
    path = _write_recording(tmp_path / "wheel.jsonl", _detent_rows())
    assert main(["--events", str(path), "--no-detent", "--threshold", "30"]) == 0
    out = capsys.readouterr().out
    assert "trackpad=4 wheel=0" in out
    assert "last_detected_detent=None" in out


def test_main_requires_input(capsys) -> None:
    assert main([]) == 2
    assert "--events" in capsys.readouterr().out


def test_main_reports_bad_recording(tmp_path: Path, capsys) -> None:
    path = tmp_path / "wheel.jsonl"
    path.write_text("not json\n", encoding="utf-8")
    assert main(["--events", str(path)]) == 2
    assert "line 1" in capsys.readouterr().out


def test_main_threshold_flag_reclassifies_magnitude(tmp_path: Path, capsys) -> None:
    path = _write_recording(tmp_path / "wheel.jsonl", [{"dy": 40, "timestamp_ms": 100}])
    assert main(["--events", str(path), "--threshold", "30", "--json"]) == 0
    (row,) = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert row["device"] == "wheel"

    assert main(["--events", str(path), "--json"]) == 0
    (row,) = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert row["device"] == "trackpad"


def test_negative_threshold_flag_is_clamped_to_zero() -> None:
    args = build_parser().parse_args(["--threshold", "-5", "--no-detent"])
    settings = _settings_from_args(args)
    assert settings.trackpad_threshold == 0.0
    assert settings.detent_detection_enabled is False


class _LiveCanvas:
    def __init__(self) -> None:
        self.draw_callback = None

    def request_draw(self, draw_function=None) -> None:
        if draw_function is not None:
            self.draw_callback = draw_function


class _LiveSource:
    def __init__(self, events: list[WheelEvent]) -> None:
        self.canvas = _LiveCanvas()
        self._pending = list(events)
        self._queued: list[WheelEvent] = []

    def poll_wheel_events(self) -> tuple[WheelEvent, ...]:
        drained = tuple(self._queued)
        self._queued.clear()
        return drained

    def run_loop(self) -> None:
        self._queued.extend(self._pending)
        self.canvas.draw_callback()


def test_main_live_prints_rows_from_window_source(monkeypatch, capsys) -> None:
    events = [
        WheelEvent(x=0.0, y=0.0, dy=dy, timestamp_ms=t)
        for dy, t in ((10, 100), (20, 150), (10, 200), (40, 250))
    ]
    created: list[dict[str, object]] = []

    def _factory(**kwargs):
        created.append(kwargs)
        return _LiveSource(events)

    monkeypatch.setattr(wheel_replay_main, "create_rendercanvas_wheel_source", _factory)

    assert main(["--live", "--json"]) == 0
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [row["device"] for row in rows] == ["trackpad", "trackpad", "wheel", "wheel"]
    assert rows[-1]["detected_detent"] == 10
    assert len(created) == 1


def test_main_live_without_backend_exits_2(monkeypatch, capsys) -> None:
    def _factory(**kwargs):
        raise RuntimeError("Render canvas backend unavailable.")

    monkeypatch.setattr(wheel_replay_main, "create_rendercanvas_wheel_source", _factory)

    assert main(["--live"]) == 2
    assert "backend unavailable" in capsys.readouterr().out
