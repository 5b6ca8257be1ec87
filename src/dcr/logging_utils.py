"""Structured logging for dcr.

Events are emitted as compact JSON payloads through the standard ``logging``
module and rendered by ``StructuredTextFormatter`` as readable blocks.
Logging is off unless a log file is given on the command line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle events
    "app_start": [
        "ts",
        "level",
        "mode",
        "project",
        "compose_file",
        "group_file",
        "config_dir",
        "log_file",
    ],
    "app_stop": [
        "ts",
        "level",
        "reason",
        "uptime_ms",
        "error_type",
        "error",
    ],
    # Project events
    "session_load": [
        "ts",
        "level",
        "project",
        "compose_file",
        "group_file",
        "service_count",
        "group_count",
        "trigger",
    ],
    "group_support_disabled": [
        "ts",
        "level",
        "project",
        "group_file",
        "error",
    ],
    "project_alias": [
        "ts",
        "level",
        "project",
        "alias",
    ],
    # Command execution events
    "command_exec": [
        "ts",
        "level",
        "command",
        "args_summary",
        "argv",
        "returncode",
        "elapsed_ms",
    ],
    "command_error": [
        "ts",
        "level",
        "command",
        "args_summary",
        "error_type",
        "error",
    ],
}
DEFAULT_EVENT_KEY_ORDER = ["ts", "level", "logger"]


class StructuredTextFormatter(logging.Formatter):
    """Format all log records as human-readable structured blocks."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # Emit a blank line between entries without adding extra trailing lines.
        self._first_entry = True

    @staticmethod
    def _format_value(value: Any) -> str:
        value_str = str(value)
        return value_str.replace("\n", "\\n")

    @staticmethod
    def _ordered_keys(event_name: str, data: dict[str, Any]) -> list[str]:
        preferred = EVENT_KEY_ORDER.get(event_name, DEFAULT_EVENT_KEY_ORDER)
        preferred_present = [k for k in preferred if k in data and data[k] is not None]
        remaining = sorted(
            k for k in data.keys() if k not in preferred and data[k] is not None
        )
        return preferred_present + remaining

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts": datetime.now().astimezone().isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        message = record.getMessage()
        parsed = None
        if message.startswith("{") and message.endswith("}"):
            try:
                parsed = json.loads(message)
            except ValueError:
                parsed = None

        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["event"] = record.name
            base["message"] = message

        event_name = str(base.pop("event", record.name))
        lines = [f"=== {event_name} ==="]

        for key in self._ordered_keys(event_name, base):
            lines.append(f"{key}: {self._format_value(base[key])}")

        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        body = "\n".join(lines)
        if self._first_entry:
            self._first_entry = False
            return body
        return "\n" + body


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def summarize_args(args: list[str]) -> str:
    """Summarize command args for logs."""
    return " ".join(" ".join(args).split())


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        payload[key] = _to_log_safe(value)
    logging.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(log_file: str | None = None) -> None:
    """Set up logging configuration."""
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(StructuredTextFormatter())
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    else:
        logging.disable(logging.CRITICAL)
