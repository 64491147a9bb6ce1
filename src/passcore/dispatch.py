"""Dispatch engine: resolve an argument vector and invoke its command."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from passcore.constants import COMMENT_MARKER
from passcore.errors import CommandError
from passcore.logging import log_event, summarize_command_args
from passcore.session import Session


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def echo_args(session: Session, args: Sequence[str]) -> None:
    """Write the prompt and full argument vector to the session output."""
    session.write(session.prompt() + " ".join(args))


def dispatch(session: Session, args: list[str]) -> None:
    """Invoke the command named by ``args[0]`` with the full vector.

    The document's selection stack is cut back to its entry depth whether the
    command returns or raises, and the document is checked after every
    successful invocation.
    """
    if not args or args[0].startswith(COMMENT_MARKER):
        return

    if session.echo:
        echo_args(session, args)

    command = session.registry.lookup(args[0])
    document = session.document

    # Adapters truncate args in place, so summarize the line as given.
    args_summary = summarize_command_args(args)
    depth = len(document.selection_stack)
    command.call_counter += 1
    started = time.perf_counter()
    try:
        command.execute(args, session)
    except CommandError as e:
        log_event(
            "command_error",
            level=logging.WARNING,
            command=command.name,
            args_summary=args_summary,
            selection_depth=depth,
            elapsed_ms=_elapsed_ms(started),
            error_type=type(e).__name__,
            error=str(e),
        )
        raise
    finally:
        del document.selection_stack[depth:]

    log_event(
        "command_exec",
        command=command.name,
        args_summary=args_summary,
        selection_depth=depth,
        elapsed_ms=_elapsed_ms(started),
    )
    document.check()
