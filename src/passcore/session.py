"""Session state container for passcore runtime.

A session is the context object threaded through every dispatch: it holds the
registry and document plus the toggles and transient buffers the interpreter
and adapters share. One session evaluates one command line at a time.
"""

from __future__ import annotations

import sys
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, TextIO

from passcore.constants import APP_NAME
from passcore.document import Document
from passcore.errors import InternalError
from passcore.streams import StreamHandle

if TYPE_CHECKING:
    from passcore.registry import CommandRegistry


@dataclass
class Session:
    """In-memory runtime state for a passcore session."""

    registry: "CommandRegistry"
    document: Document = field(default_factory=Document)
    echo: bool = False
    next_args: list[str] = field(default_factory=list)
    script_source: TextIO | None = None
    last_here_document: str = ""
    out: TextIO | None = None
    stdin: TextIO | None = None
    _stream_scopes: list[ExitStack] = field(default_factory=list, repr=False)

    @property
    def output(self) -> TextIO:
        """Sink for user-facing command output (defaults to stdout)."""
        return self.out if self.out is not None else sys.stdout

    @property
    def input(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    def write(self, text: str = "") -> None:
        """Write one line of user-facing output."""
        self.output.write(text + "\n")

    def prompt(self) -> str:
        """Prompt text reflecting the active target, if any."""
        target = self.document.active_target
        if target:
            return f"{APP_NAME} [{target}]> "
        return f"{APP_NAME}> "

    @contextmanager
    def stream_scope(self) -> Iterator[ExitStack]:
        """Scope that closes every stream adopted while it is innermost."""
        with ExitStack() as stack:
            self._stream_scopes.append(stack)
            try:
                yield stack
            finally:
                self._stream_scopes.pop()

    def adopt(self, handle: StreamHandle) -> StreamHandle:
        """Close ``handle`` when the innermost stream scope exits."""
        if not self._stream_scopes:
            raise InternalError("No stream scope is active")
        self._stream_scopes[-1].callback(handle.close)
        return handle
