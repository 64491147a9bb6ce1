"""Command-line interpreter for passcore scripts and the interactive shell.

Grammar of one line::

    !SHELL_COMMAND          run through the system shell
    # ...                   comment
    TOKEN* [;|;;|;;;] ...   one or more chained commands

A token ending in ``;`` closes the current command and dispatches it at once.
``;;`` additionally runs ``clean`` and ``;;;`` runs ``clean -purge``.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import TextIO

from passcore.constants import (
    CHAIN_FOLLOW_UPS,
    CHAIN_MARKER,
    COMMENT_MARKER,
    SHELL_ESCAPE_MARKER,
    TOKEN_SEPARATORS,
)
from passcore.dispatch import dispatch
from passcore.errors import ShellCommandError
from passcore.logging import log_event
from passcore.session import Session
from passcore.streams import decode_failure, open_input


def run_shell(session: Session, command: str) -> None:
    """Run ``command`` through the system shell; non-zero exit raises."""
    command = command.lstrip(" \t").rstrip("\r\n")
    session.write(f"Shell command: {command}")
    session.output.flush()

    started = time.perf_counter()
    result = subprocess.run(command, shell=True)
    log_event(
        "shell_exec",
        level=logging.INFO if result.returncode == 0 else logging.WARNING,
        command=command,
        returncode=result.returncode,
        elapsed_ms=int((time.perf_counter() - started) * 1000),
    )
    if result.returncode != 0:
        raise ShellCommandError(result.returncode)


def call(session: Session, line: str) -> None:
    """Interpret one command line, dispatching commands as they are parsed."""
    line = line.lstrip(TOKEN_SEPARATORS)
    if not line or line.startswith(COMMENT_MARKER):
        return

    if line.startswith(SHELL_ESCAPE_MARKER):
        run_shell(session, line[len(SHELL_ESCAPE_MARKER):])
        return

    args: list[str] = []
    for token in line.split():
        if token == COMMENT_MARKER:
            break
        if not token.endswith(CHAIN_MARKER):
            args.append(token)
            continue

        bare = token.rstrip(CHAIN_MARKER)
        if bare:
            args.append(bare)
        dispatch(session, args)
        args = []

        # More than three semicolons add nothing.
        follow_up = CHAIN_FOLLOW_UPS.get(len(token) - len(bare))
        if follow_up:
            call(session, follow_up)

    dispatch(session, args)


def run_script(session: Session, stream: TextIO, name: str = "<script>") -> None:
    """Run every line of ``stream`` as a command line.

    While the script runs it is the session's script source, so frontends
    can read here-documents from the lines that follow the current one.
    """
    previous_source = session.script_source
    previous_here_document = session.last_here_document
    session.script_source = stream
    log_event("script_start", script_file=name)
    try:
        while True:
            try:
                line = stream.readline()
            except UnicodeDecodeError as e:
                raise decode_failure(name, e) from e
            if not line:
                break
            call(session, line)
    finally:
        session.script_source = previous_source
        session.last_here_document = previous_here_document


def run_script_file(session: Session, filename: str) -> None:
    """Open ``filename`` and run it as a script."""
    handle = open_input(filename)
    try:
        run_script(session, handle.stream, filename)
    finally:
        handle.close()
