"""Frontends: commands that read input into the document.

A frontend's business logic lives in ``execute_source``; it parses its own
options and then calls ``resolve_source`` to obtain the input stream. The
stream is either handed in by the caller (``frontend_call``), opened from a
named file, or built from a here-document in the running script.

Several filenames on one command line read them one after another: the
adapter keeps the first and leaves the rest in ``session.next_args``, and
``execute`` re-invokes the frontend with them until nothing is left.
"""

from __future__ import annotations

from typing import TextIO, Union

from passcore.constants import FRONTEND_PREFIX, HERE_DOCUMENT_MARKER, STDIN_NAME, STDIO_ARG
from passcore.errors import (
    HereDocumentError,
    InternalError,
    MissingMarkerError,
    UnexpectedEOFError,
)
from passcore.registry import Command, CommandKind, CommandRegistry, split_format_name
from passcore.session import Session
from passcore.streams import (
    BorrowedStream,
    OwnedStream,
    StreamHandle,
    decode_failure,
    open_buffer,
    open_input,
)


class Frontend(Command):
    """Command reading a file format; registered as ``read_<format>``."""

    kind = CommandKind.FRONTEND

    def __init__(
        self,
        format_name: str,
        short_help: str,
        registry: CommandRegistry | None = None,
    ) -> None:
        name, self.format_name = split_format_name(format_name, FRONTEND_PREFIX)
        super().__init__(name, short_help, registry)

    def execute(self, args: list[str], session: Session) -> None:
        """Top-level entry: run once per filename on the command line."""
        if session.next_args:
            raise InternalError(
                f"Frontend '{self.name}' entered with pending continuation arguments"
            )
        try:
            first = True
            while args:
                session.next_args = []
                if not first:
                    self.call_counter += 1
                first = False
                with session.stream_scope():
                    self.execute_source(None, args, session)
                args = session.next_args
        finally:
            session.next_args = []

    def execute_source(
        self, source: StreamHandle | None, args: list[str], session: Session
    ) -> None:
        raise NotImplementedError(
            f"Frontend '{self.name}' does not implement execute_source()"
        )

    def resolve_source(
        self,
        source: StreamHandle | None,
        args: list[str],
        argidx: int,
        session: Session,
    ) -> StreamHandle:
        """Resolve the input stream from ``args[argidx:]``.

        ``args`` is edited in place: ``args[0]`` becomes the canonical command
        name, arguments after the chosen filename move to
        ``session.next_args``, and a caller-supplied stream's name is appended.
        """
        called_with_stream = source is not None
        filename = source.name if source is not None else ""

        session.next_args = []
        if argidx < len(args):
            if args[argidx].startswith("-"):
                self.syntax_error(
                    args, argidx, "Unknown option or option in arguments.", session
                )
            if source is not None:
                self.syntax_error(
                    args, argidx, "Extra filename argument in direct file mode.", session
                )

            start = argidx
            filename = args[argidx]
            if filename == HERE_DOCUMENT_MARKER and argidx + 1 < len(args):
                argidx += 1
                filename += args[argidx]

            if filename.startswith(HERE_DOCUMENT_MARKER):
                source = session.adopt(
                    self._read_here_document(filename, args, argidx, session)
                )
            else:
                source = session.adopt(open_input(filename))

            for i in range(argidx + 1, len(args)):
                if args[i].startswith("-"):
                    self.syntax_error(args, i, "Found option, expected arguments.", session)

            if argidx + 1 < len(args):
                session.next_args = args[:start] + args[argidx + 1:]
                del args[argidx + 1:]

        if source is None:
            self.syntax_error(args, argidx, "No filename given.", session)

        if called_with_stream:
            args.append(filename)
        args[0] = self.name
        return source

    def _read_here_document(
        self, marker_arg: str, args: list[str], argidx: int, session: Session
    ) -> OwnedStream:
        script = session.script_source
        if script is None:
            self.syntax_error(
                args,
                argidx,
                f"Unexpected here document '{marker_arg}' outside of script!",
                session,
                HereDocumentError,
            )
        marker = marker_arg[len(HERE_DOCUMENT_MARKER):]
        if not marker:
            self.syntax_error(
                args,
                argidx,
                "Missing EOT marker in here document!",
                session,
                MissingMarkerError,
            )

        lines: list[str] = []
        while True:
            try:
                line = script.readline()
            except UnicodeDecodeError as e:
                raise decode_failure(marker_arg, e) from e
            if not line:
                self.syntax_error(
                    args,
                    argidx,
                    f"Unexpected end of file in here document '{marker_arg}'!",
                    session,
                    UnexpectedEOFError,
                )
            if line.lstrip().rstrip("\r\n") == marker:
                break
            lines.append(line)

        session.last_here_document = "".join(lines)
        return open_buffer(session.last_here_document, marker_arg)


def frontend_call(
    session: Session,
    stream: TextIO | None,
    filename: str,
    command: Union[str, list[str]],
) -> None:
    """Invoke a frontend by format name.

    With ``stream`` the frontend reads from it (the caller keeps ownership);
    ``filename == "-"`` reads standard input; otherwise ``filename``, if any,
    is appended to the arguments and opened by the frontend itself.
    """
    args = command.split() if isinstance(command, str) else list(command)
    if not args:
        return
    frontend = session.registry.lookup(args[0], CommandKind.FRONTEND)
    assert isinstance(frontend, Frontend)

    document = session.document
    depth = len(document.selection_stack)
    frontend.call_counter += 1
    pending_args = session.next_args
    session.next_args = []
    try:
        if stream is not None:
            with session.stream_scope():
                frontend.execute_source(BorrowedStream(stream, filename), args, session)
        elif filename == STDIO_ARG:
            with session.stream_scope():
                frontend.execute_source(
                    BorrowedStream(session.input, STDIN_NAME), args, session
                )
        else:
            if filename:
                args.append(filename)
            frontend.execute(args, session)
    finally:
        # A caller running its own file loop keeps its continuation.
        session.next_args = pending_args
        del document.selection_stack[depth:]

    document.check()
