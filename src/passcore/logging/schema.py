"""Preferred key order for structured log events."""

from __future__ import annotations

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts", "ts_utc", "level", "logger", "message"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle events
    "app_start": [
        "ts",
        "level",
        "mode",
        "script_file",
        "commands",
        "input_files",
        "log_file",
        "echo",
    ],
    "app_stop": [
        "ts",
        "level",
        "reason",
        "uptime_ms",
        "exit_code",
        "error_type",
        "error",
    ],
    # Command execution events
    "command_exec": [
        "ts",
        "level",
        "command",
        "args_summary",
        "selection_depth",
        "elapsed_ms",
    ],
    "command_error": [
        "ts",
        "level",
        "command",
        "args_summary",
        "selection_depth",
        "elapsed_ms",
        "error_type",
        "error",
    ],
    "shell_exec": [
        "ts",
        "level",
        "command",
        "returncode",
        "elapsed_ms",
    ],
    "script_start": [
        "ts",
        "level",
        "script_file",
    ],
    "fatal_error": [
        "ts",
        "level",
        "error_type",
        "error",
    ],
}

# Fields holding filesystem paths; resolved to absolute form in logs.
LOG_PATH_FIELDS = {
    "script_file",
    "log_file",
}
