"""Commands every passcore registry carries."""

from __future__ import annotations

from passcore.errors import UnknownCommandError
from passcore.interpreter import run_script_file
from passcore.registry import Command, CommandRegistry
from passcore.session import Session

_HELP_HELP = """
    help  .............  list all commands
    help <command>  ...  print help message for given command
    help -all  ........  print complete command reference
"""

_ECHO_HELP = """
    echo on

Print all commands to log before executing them.


    echo off

Do not print all commands to log before executing them. (default)
"""

_SCRIPT_HELP = """
    script <filename>

This command executes the commands in the given file, one line at a time.
Lines of the script that follow a here-document marker (<<EOT) are read by
the command that uses the marker, up to the line holding only the marker.
"""


class HelpCommand(Command):
    help_text = _HELP_HELP

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("help", "display help messages", registry)

    def execute(self, args: list[str], session: Session) -> None:
        registry = session.registry

        if len(args) == 1:
            session.write()
            for command in registry.commands():
                session.write(f"    {command.name:<20} {command.short_help}")
            session.write()
            session.write("Type 'help <command>' for more information on a command.")
            session.write()
            return

        if len(args) == 2:
            if args[1] == "-all":
                for command in registry.commands():
                    title = f"{command.name}  --  {command.short_help}"
                    session.write()
                    session.write()
                    session.write(title)
                    session.write("=" * len(title))
                    session.write(command.help().rstrip("\n"))
                return
            try:
                command = registry.lookup(args[1])
            except UnknownCommandError:
                session.write(f"No such command: {args[1]}")
                return
            session.write(command.help().rstrip("\n"))
            return

        session.write(self.help().rstrip("\n"))


class EchoCommand(Command):
    help_text = _ECHO_HELP

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("echo", "turning echoing back of commands on and off", registry)

    def execute(self, args: list[str], session: Session) -> None:
        if len(args) > 2:
            self.syntax_error(args, 2, "Unexpected argument.", session)

        if len(args) == 2:
            if args[1] == "on":
                session.echo = True
            elif args[1] == "off":
                session.echo = False
            else:
                self.syntax_error(args, 1, "Unexpected argument.", session)

        session.write(f"echo {'on' if session.echo else 'off'}")


class ScriptCommand(Command):
    help_text = _SCRIPT_HELP

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("script", "execute commands from script file", registry)

    def execute(self, args: list[str], session: Session) -> None:
        if len(args) < 2:
            self.syntax_error(args, 1, "Missing script file.", session)
        self.extra_args(args, 2, session)
        run_script_file(session, args[1])


def register_builtins(registry: CommandRegistry) -> None:
    """Queue the built-in commands on ``registry``."""
    HelpCommand(registry)
    EchoCommand(registry)
    ScriptCommand(registry)
