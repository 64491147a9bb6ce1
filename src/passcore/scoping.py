"""Run commands against a narrowed selection of the document.

Passes use these helpers to invoke sub-commands on a restricted view without
the callee knowing about it. The pushed frame and the active target marker are
restored on every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union

from passcore.dispatch import dispatch
from passcore.document import Selection
from passcore.interpreter import call
from passcore.session import Session

CommandLine = Union[str, list[str]]


@contextmanager
def selection_scope(
    session: Session,
    selection: Selection,
    target: str | None = None,
) -> Iterator[Selection]:
    """Push ``selection`` and set the active target for the block's duration."""
    document = session.document
    saved_target = document.active_target
    document.active_target = target
    document.selection_stack.append(selection)
    depth = len(document.selection_stack)
    try:
        yield selection
    finally:
        del document.selection_stack[depth - 1:]
        document.active_target = saved_target


def _run(session: Session, command: CommandLine) -> None:
    if isinstance(command, str):
        call(session, command)
    else:
        dispatch(session, list(command))


def call_with_selection(
    session: Session, selection: Selection, command: CommandLine
) -> None:
    """Run ``command`` (a line or an argument vector) under ``selection``."""
    with selection_scope(session, selection):
        _run(session, command)


def call_with_target(session: Session, target: str, command: CommandLine) -> None:
    """Run ``command`` with only the module ``target`` selected."""
    with selection_scope(session, Selection.of(target), target=target):
        _run(session, command)
