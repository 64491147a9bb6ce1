"""Syntax-error reporting with a caret under the offending argument."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, Sequence

from passcore.errors import CommandSyntaxError

if TYPE_CHECKING:
    from passcore.session import Session


def command_text(args: Sequence[str]) -> str:
    """Reconstruct the command line an argument vector came from."""
    return " ".join(args)


def caret_offset(args: Sequence[str], argidx: int) -> int:
    """Character offset of ``args[argidx]`` within ``command_text(args)``.

    An index past the end points just behind the last argument.
    """
    return sum(len(arg) + 1 for arg in args[:argidx])


def render_syntax_error(args: Sequence[str], argidx: int, message: str) -> str:
    """Format the error message with the offending line and caret line."""
    line = command_text(args)
    pointer = " " * caret_offset(args, argidx) + "^"
    return f"Command syntax error: {message}\n> {line}\n> {pointer}"


def syntax_error(
    args: Sequence[str],
    argidx: int,
    message: str,
    session: "Session | None" = None,
    help_text: str | None = None,
    error_cls: type[CommandSyntaxError] = CommandSyntaxError,
) -> NoReturn:
    """Report a syntax error in ``args`` at ``argidx`` and raise it.

    When a session is given, the command line and the command's help are
    written to its output before raising.
    """
    if session is not None:
        session.write()
        session.write(f"Syntax error in command `{command_text(args)}':")
        if help_text:
            session.write(help_text.rstrip("\n"))
    raise error_cls(render_syntax_error(args, argidx, message))
