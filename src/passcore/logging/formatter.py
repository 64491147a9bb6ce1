"""Structured plaintext log formatter implementation."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from ..time_utils import utc_now_iso as _utc_now_roundtrip
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER


def _render_args_summary(value: Any) -> str:
    return str(value) if value else "(none)"


def _render_toggle(value: Any) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def _render_elapsed(value: Any) -> str:
    return f"{value} ms"


def _render_command_lines(value: Any) -> str:
    # Command lines contain spaces themselves.
    if isinstance(value, list):
        return " | ".join(str(v) for v in value)
    return str(value)


FIELD_RENDERERS: dict[str, Callable[[Any], str]] = {
    "args_summary": _render_args_summary,
    "commands": _render_command_lines,
    "echo": _render_toggle,
    "elapsed_ms": _render_elapsed,
    "uptime_ms": _render_elapsed,
}


def _parse_payload(message: str) -> dict[str, Any] | None:
    """Return the JSON object emitted by ``log_event``, if ``message`` is one."""
    if not (message.startswith("{") and message.endswith("}")):
        return None
    try:
        parsed = json.loads(message)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class StructuredTextFormatter(logging.Formatter):
    """Format all log records as human-readable structured blocks."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # Emit a blank line between entries without adding extra trailing lines.
        self._first_entry = True

    @staticmethod
    def _format_value(key: str, value: Any) -> str:
        renderer = FIELD_RENDERERS.get(key)
        if renderer is not None:
            value_str = renderer(value)
        elif isinstance(value, list):
            value_str = " ".join(str(v) for v in value)
        else:
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
        fields: dict[str, Any] = {
            "ts_utc": _utc_now_roundtrip(),
            "level": record.levelname,
            "logger": record.name,
        }

        message = record.getMessage()
        payload = _parse_payload(message)
        if payload is not None:
            fields.update(payload)
        else:
            fields["message"] = message

        event_name = str(fields.pop("event", record.name))
        lines = [f"=== {event_name} ==="]
        lines.extend(
            f"{key}: {self._format_value(key, fields[key])}"
            for key in self._ordered_keys(event_name, fields)
        )

        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        body = "\n".join(lines)
        if self._first_entry:
            self._first_entry = False
            return body
        return "\n" + body
