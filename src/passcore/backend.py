"""Backends: commands that write the document out."""

from __future__ import annotations

from typing import TextIO, Union

from passcore.constants import BACKEND_PREFIX, STDIO_ARG, STDOUT_NAME
from passcore.registry import Command, CommandKind, CommandRegistry, split_format_name
from passcore.session import Session
from passcore.streams import BorrowedStream, StreamHandle, open_output


class Backend(Command):
    """Command writing a file format; registered as ``write_<format>``."""

    kind = CommandKind.BACKEND

    def __init__(
        self,
        format_name: str,
        short_help: str,
        registry: CommandRegistry | None = None,
    ) -> None:
        name, self.format_name = split_format_name(format_name, BACKEND_PREFIX)
        super().__init__(name, short_help, registry)

    def execute(self, args: list[str], session: Session) -> None:
        with session.stream_scope():
            self.execute_sink(None, args, session)

    def execute_sink(
        self, sink: StreamHandle | None, args: list[str], session: Session
    ) -> None:
        raise NotImplementedError(
            f"Backend '{self.name}' does not implement execute_sink()"
        )

    def resolve_sink(
        self,
        sink: StreamHandle | None,
        args: list[str],
        argidx: int,
        session: Session,
    ) -> StreamHandle:
        """Resolve the output stream from ``args[argidx:]``.

        ``-`` means standard output, as does giving no sink at all.
        """
        called_with_stream = sink is not None
        filename = sink.name if sink is not None else ""

        for i in range(argidx, len(args)):
            arg = args[i]
            if arg.startswith("-") and arg != STDIO_ARG:
                self.syntax_error(args, i, "Unknown option or option in arguments.", session)
            if sink is not None:
                self.syntax_error(
                    args, i, "Extra filename argument in direct file mode.", session
                )

            if arg == STDIO_ARG:
                filename = STDOUT_NAME
                sink = BorrowedStream(session.output, STDOUT_NAME)
                continue

            filename = arg
            sink = session.adopt(open_output(filename))

        if called_with_stream:
            args.append(filename)
        args[0] = self.name

        if sink is None:
            sink = BorrowedStream(session.output, STDOUT_NAME)
        return sink


def backend_call(
    session: Session,
    stream: TextIO | None,
    filename: str,
    command: Union[str, list[str]],
) -> None:
    """Invoke a backend by format name.

    With ``stream`` the backend writes to it (the caller keeps ownership);
    ``filename == "-"`` writes to standard output; otherwise ``filename``, if
    any, is appended to the arguments and opened by the backend itself.
    """
    args = command.split() if isinstance(command, str) else list(command)
    if not args:
        return
    backend = session.registry.lookup(args[0], CommandKind.BACKEND)
    assert isinstance(backend, Backend)

    document = session.document
    depth = len(document.selection_stack)
    backend.call_counter += 1
    try:
        with session.stream_scope():
            if stream is not None:
                backend.execute_sink(BorrowedStream(stream, filename), args, session)
            elif filename == STDIO_ARG:
                backend.execute_sink(
                    BorrowedStream(session.output, STDOUT_NAME), args, session
                )
            else:
                if filename:
                    args.append(filename)
                backend.execute_sink(None, args, session)
    finally:
        del document.selection_stack[depth:]

    document.check()
