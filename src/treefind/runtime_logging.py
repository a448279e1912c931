"""Structured JSONL runtime logging for treefind.

The UI thread and the search workers share one logger. Each record is a
single JSON line carrying the thread name, and :meth:`RuntimeLogger.bind`
attaches fixed fields (a search's ``request_id``) to every line a worker
writes.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from treefind.paths import runtime_log_path

LogLevel = Literal["off", "error", "warning", "info", "debug"]

_SEVERITY: dict[str, int] = {"debug": 10, "info": 20, "warning": 30, "error": 40, "off": 100}
_ALIASES: dict[str, str] = {"warn": "warning", "none": "off", "disabled": "off", "0": "off"}

_runtime_logger: RuntimeLogger | None = None


def parse_level(value: str | None, default: LogLevel = "warning") -> LogLevel:
    if not value:
        return default
    normalized = value.strip().lower()
    normalized = _ALIASES.get(normalized, normalized)
    if normalized not in _SEVERITY:
        return default
    return normalized  # type: ignore[return-value]


def resolve_log_file(path: str | Path | None) -> Path:
    if path is None:
        return runtime_log_path()
    return Path(path).expanduser().absolute()


class RuntimeLogger:
    def __init__(
        self,
        level: LogLevel,
        sink_path: Path | None,
        *,
        context: dict[str, Any] | None = None,
        lock: threading.Lock | None = None,
    ) -> None:
        self.level = level
        self.sink_path = sink_path
        self.context = dict(context or {})
        self._lock = lock or threading.Lock()

    def enabled(self, level: str) -> bool:
        if self.sink_path is None:
            return False
        threshold = _SEVERITY.get(self.level, _SEVERITY["warning"])
        return _SEVERITY.get(level, _SEVERITY["debug"]) >= threshold

    def bind(self, **fields: Any) -> RuntimeLogger:
        """Return a logger writing to the same sink with ``fields`` on every line."""
        return RuntimeLogger(
            self.level,
            self.sink_path,
            context={**self.context, **fields},
            lock=self._lock,
        )

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        payload = {
            "ts": datetime.now(UTC).isoformat(),
            "level": level,
            "event": event,
            "pid": os.getpid(),
            "thread": threading.current_thread().name,
            **self.context,
            **fields,
        }
        line = json.dumps(payload, sort_keys=True, default=str)
        assert self.sink_path is not None
        with self._lock:
            self.sink_path.parent.mkdir(parents=True, exist_ok=True)
            with self.sink_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self.log("error", event, **fields)


def configure_runtime_logging(
    *,
    level: str | None = None,
    log_file: str | Path | None = None,
) -> RuntimeLogger:
    """Install the process-wide logger.

    Explicit arguments win over ``TREEFIND_LOG_LEVEL`` and
    ``TREEFIND_LOG_FILE``. Level ``off`` installs a logger with no sink.
    """
    global _runtime_logger

    effective_level = parse_level(level or os.getenv("TREEFIND_LOG_LEVEL"))
    if effective_level == "off":
        _runtime_logger = RuntimeLogger("off", None)
        return _runtime_logger

    sink = resolve_log_file(log_file or os.getenv("TREEFIND_LOG_FILE"))
    _runtime_logger = RuntimeLogger(effective_level, sink)
    _runtime_logger.info("logging.configured", configured_level=effective_level, sink_path=str(sink))
    return _runtime_logger


def get_runtime_logger() -> RuntimeLogger:
    global _runtime_logger
    if _runtime_logger is None:
        _runtime_logger = configure_runtime_logging()
    return _runtime_logger
