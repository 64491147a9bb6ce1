"""Interactive shell loop for passcore."""

from __future__ import annotations

import os
import traceback
from pathlib import Path
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from passcore.constants import DEBUG_ENV_VAR, EXIT_OK, REPL_HISTORY_FILE
from passcore.errors import CommandError, FatalError
from passcore.interpreter import call
from passcore.session import Session

_EXIT_COMMANDS = frozenset(("exit", "quit"))


class LineSource(Protocol):
    def prompt(self, message: str) -> str: ...


def report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(f"ERROR: {error}")
    if os.getenv(DEBUG_ENV_VAR):
        print("Debug traceback:")
        traceback.print_exc()


def ensure_history_file() -> Path:
    """Ensure the REPL history file path exists and return it."""
    history_file = Path(REPL_HISTORY_FILE).expanduser()
    history_file.parent.mkdir(parents=True, exist_ok=True)
    return history_file


def create_prompt_session() -> PromptSession:
    """Create prompt-toolkit session for REPL input."""
    return PromptSession(history=FileHistory(str(ensure_history_file())))


def repl(session: Session, line_source: LineSource | None = None) -> int:
    """Read and run command lines until exit, Ctrl-D or a fatal error.

    Command errors are reported and the loop continues; fatal errors
    propagate to the caller.
    """
    if line_source is None:
        line_source = create_prompt_session()

    print("Type 'help' for a command overview, 'exit' or Ctrl-D to quit")

    while True:
        try:
            line = line_source.prompt(session.prompt())
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if line.strip() in _EXIT_COMMANDS:
            break

        try:
            call(session, line)
        except CommandError as e:
            print(f"ERROR: {e}")
        except FatalError:
            raise
        except Exception as e:
            report_unexpected_error(e)

    return EXIT_OK
