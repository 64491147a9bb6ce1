"""Command descriptors and the name-keyed command registry.

Registration is two-phase: descriptors are queued (``enqueue`` or the
``registry=`` constructor argument) in a defined order, then
``register_all()`` moves them into the lookup tables. Frontends and backends
land in the generic table under their command name and in their kind table
under their format name, so every command shares one dispatch surface.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Iterator, NoReturn, Sequence

from passcore.constants import NAME_ESCAPE_MARKER
from passcore.errors import (
    CommandSyntaxError,
    DuplicateNameError,
    InternalError,
    UnknownCommandError,
)
from passcore.reporting import syntax_error

if TYPE_CHECKING:
    from passcore.session import Session


class CommandKind(enum.Enum):
    GENERIC = "generic"
    FRONTEND = "frontend"
    BACKEND = "backend"


def split_format_name(format_name: str, prefix: str) -> tuple[str, str]:
    """Return ``(command_name, format_name)`` for an I/O descriptor.

    ``"json"`` with prefix ``"read_"`` gives ``("read_json", "json")``;
    ``"=script"`` gives ``("script", "script")``.
    """
    if format_name.startswith(NAME_ESCAPE_MARKER):
        bare = format_name[len(NAME_ESCAPE_MARKER):]
        return bare, bare
    return prefix + format_name, format_name


class Command:
    """A named operation invokable from a command line.

    Subclasses set ``help_text`` (shown by ``help <name>``) and implement
    ``execute(args, session)``. ``args[0]`` is always the command name.
    """

    kind = CommandKind.GENERIC
    help_text = ""

    def __init__(
        self,
        name: str,
        short_help: str,
        registry: "CommandRegistry | None" = None,
    ) -> None:
        self.name = name
        self.short_help = short_help
        self.call_counter = 0
        if registry is not None:
            registry.enqueue(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    def help(self) -> str:
        """Detailed help text for this command."""
        if self.help_text:
            return self.help_text
        return f"\nNo help message for command `{self.name}'.\n"

    def execute(self, args: list[str], session: "Session") -> None:
        raise NotImplementedError(f"Command '{self.name}' does not implement execute()")

    def syntax_error(
        self,
        args: Sequence[str],
        argidx: int,
        message: str,
        session: "Session | None" = None,
        error_cls: type[CommandSyntaxError] = CommandSyntaxError,
    ) -> NoReturn:
        """Raise a syntax error pointing at ``args[argidx]``."""
        syntax_error(args, argidx, message, session, self.help(), error_cls)

    def extra_args(self, args: Sequence[str], argidx: int, session: "Session") -> None:
        """Reject anything left over after option parsing."""
        if argidx < len(args):
            if args[argidx].startswith("-"):
                self.syntax_error(
                    args, argidx, "Unknown option or option in arguments.", session
                )
            self.syntax_error(args, argidx, "Extra argument.", session)


class CommandRegistry:
    """Name-keyed lookup tables for generic commands, frontends and backends."""

    def __init__(self) -> None:
        self._queue: list[Command] = []
        self._commands: dict[str, Command] = {}
        self._frontends: dict[str, Command] = {}
        self._backends: dict[str, Command] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def pending(self) -> int:
        """Number of queued, not yet registered descriptors."""
        return len(self._queue)

    def enqueue(self, command: Command) -> Command:
        """Queue a descriptor; tables are untouched until ``register_all``."""
        self._queue.append(command)
        return command

    def register_all(self) -> None:
        """Drain the queue in order into the lookup tables."""
        while self._queue:
            self._register(self._queue.pop(0))

    def _register(self, command: Command) -> None:
        if command.name in self._commands:
            raise DuplicateNameError("command", command.name)

        kind_table = self._kind_table(command.kind)
        if kind_table is not None:
            format_name = command.format_name  # type: ignore[attr-defined]
            if format_name in kind_table:
                raise DuplicateNameError(command.kind.value, format_name)
            kind_table[format_name] = command

        self._commands[command.name] = command

    def _kind_table(self, kind: CommandKind) -> dict[str, Command] | None:
        if kind is CommandKind.FRONTEND:
            return self._frontends
        if kind is CommandKind.BACKEND:
            return self._backends
        return None

    def teardown(self) -> None:
        """Clear every table; registration must have completed."""
        self._commands.clear()
        self._frontends.clear()
        self._backends.clear()
        if self._queue:
            raise InternalError(
                f"Registry torn down with {len(self._queue)} unregistered command(s)"
            )

    def lookup(self, name: str, kind: CommandKind = CommandKind.GENERIC) -> Command:
        """Return the descriptor registered under ``name`` in ``kind``'s table."""
        if kind is CommandKind.FRONTEND:
            table, message = self._frontends, f"No such frontend: {name}"
        elif kind is CommandKind.BACKEND:
            table, message = self._backends, f"No such backend: {name}"
        else:
            table = self._commands
            message = f"No such command: {name} (type 'help' for a command overview)"

        command = table.get(name)
        if command is None:
            raise UnknownCommandError(name, message)
        return command

    def commands(self) -> Iterator[Command]:
        """Registered commands in name order."""
        for name in sorted(self._commands):
            yield self._commands[name]

    def frontends(self) -> dict[str, Command]:
        return dict(self._frontends)

    def backends(self) -> dict[str, Command]:
        return dict(self._backends)
