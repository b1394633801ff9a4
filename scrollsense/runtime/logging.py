"""Logging pipeline: console output plus optional queued file stream."""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from scrollsense.api.logging import LoggingConfig
from scrollsense.runtime.config import load_logging_config

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def _file_handler(path: str, kind: str) -> logging.Handler:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(_formatter(kind))
    return handler


def configure_logging(config: LoggingConfig) -> None:
    """Install console logging; a file path adds a queued file stream."""
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(
        records,
        console,
        _file_handler(config.file_path, config.file_format),
        respect_handler_level=True,
    )
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Stop the file-stream listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def setup_logging() -> None:
    """Configure logging from environment if no handlers are present."""
    if logging.getLogger().handlers:
        return
    configure_logging(load_logging_config())


__all__ = ["JsonFormatter", "configure_logging", "setup_logging", "shutdown_logging"]
