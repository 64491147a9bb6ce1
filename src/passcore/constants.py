"""Application-level constants for passcore.

This module keeps only cross-cutting app/command/path constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "passcore"

# ============================================================================
# Command naming
# ============================================================================

# Frontend/backend command names are derived from their format name unless the
# format name starts with the escape marker.
FRONTEND_PREFIX = "read_"
BACKEND_PREFIX = "write_"
NAME_ESCAPE_MARKER = "="

# Follow-up commands appended by ";;" and ";;;" chaining.
CHAIN_FOLLOW_UPS = {
    2: "clean",
    3: "clean -purge",
}

COMMENT_MARKER = "#"
SHELL_ESCAPE_MARKER = "!"
CHAIN_MARKER = ";"
HERE_DOCUMENT_MARKER = "<<"
TOKEN_SEPARATORS = " \t\r\n"

# ============================================================================
# Stream display names
# ============================================================================

STDIN_NAME = "<stdin>"
STDOUT_NAME = "<stdout>"
STDIO_ARG = "-"

# ============================================================================
# Default directories and paths
# ============================================================================

USER_DATA_DIR = f"~/.{APP_NAME}"

# REPL command history file
REPL_HISTORY_FILE = f"{USER_DATA_DIR}/history"

LOG_FILE_EXTENSION = ".log"
DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

DEBUG_ENV_VAR = "PASSCORE_DEBUG"

# ============================================================================
# Exit codes
# ============================================================================

EXIT_OK = 0
EXIT_COMMAND_ERROR = 1
EXIT_FATAL = 2
