"""Stream handles used by the frontend and backend adapters.

A handle is either borrowed (the caller opened it and keeps ownership) or
owned (an adapter opened it and must close it). Closing a borrowed handle is a
no-op, so adapters can close every handle they resolved without tracking where
it came from.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TextIO, Union

from passcore.errors import CommandIOError


@dataclass(frozen=True)
class BorrowedStream:
    """Caller-owned stream; never closed by the adapter."""

    stream: TextIO
    name: str

    def close(self) -> None:
        return None


@dataclass(frozen=True)
class OwnedStream:
    """Adapter-owned stream; closed when the adapter is done with it."""

    stream: TextIO
    name: str

    def close(self) -> None:
        self.stream.close()


StreamHandle = Union[BorrowedStream, OwnedStream]


def open_input(filename: str) -> OwnedStream:
    """Open a named file for reading."""
    try:
        stream = open(filename, "r", encoding="utf-8")
    except OSError as e:
        raise CommandIOError(
            f"Can't open input file `{filename}' for reading: {e.strerror or e}"
        ) from e
    return OwnedStream(stream, filename)


def open_output(filename: str) -> OwnedStream:
    """Open a named file for writing, truncating it."""
    try:
        stream = open(filename, "w", encoding="utf-8")
    except OSError as e:
        raise CommandIOError(
            f"Can't open output file `{filename}' for writing: {e.strerror or e}"
        ) from e
    return OwnedStream(stream, filename)


def open_buffer(text: str, name: str) -> OwnedStream:
    """Expose an in-memory text buffer as a readable stream."""
    return OwnedStream(io.StringIO(text), name)


def decode_failure(name: str, error: UnicodeDecodeError) -> CommandIOError:
    """Error for input that is not valid UTF-8."""
    return CommandIOError(
        f"Can't decode `{name}' as UTF-8 at byte {error.start}: {error.reason}"
    )


def read_lines(handle: StreamHandle) -> list[str]:
    """Read every line of ``handle`` without line terminators."""
    try:
        return [line.rstrip("\r\n") for line in handle.stream]
    except UnicodeDecodeError as e:
        raise decode_failure(handle.name, e) from e
