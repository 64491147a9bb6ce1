"""Stock commands operating on plain-text modules.

These keep the shell usable on its own: read text files into modules, list
and clean them, and write them back out.
"""

from __future__ import annotations

from pathlib import Path

from passcore.backend import Backend
from passcore.document import Module
from passcore.errors import CommandError
from passcore.frontend import Frontend
from passcore.registry import Command, CommandRegistry
from passcore.session import Session
from passcore.streams import StreamHandle, read_lines


def module_name_for(source_name: str) -> str:
    """Derive a module name from a file or stream display name."""
    return Path(source_name).stem.strip("<>") or "module"


class ReadTextFrontend(Frontend):
    help_text = """
    read_text [-name <module>] <filename>...

Read each file into a module holding its lines. The module is named after the
file unless -name is given. Several filenames read several modules.
"""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("text", "read plain text files into modules", registry)

    def execute_source(
        self, source: StreamHandle | None, args: list[str], session: Session
    ) -> None:
        module_name = None
        argidx = 1
        while argidx < len(args):
            if args[argidx] == "-name" and argidx + 1 < len(args):
                module_name = args[argidx + 1]
                argidx += 2
                continue
            break

        source = self.resolve_source(source, args, argidx, session)
        module_name = module_name or module_name_for(source.name)
        if module_name in session.document.modules:
            raise CommandError(f"Module already exists: {module_name}")

        lines = read_lines(source)
        session.document.add_module(Module(module_name, lines))
        session.write(f"Read {len(lines)} line(s) from {source.name} into module '{module_name}'.")


class WriteTextBackend(Backend):
    help_text = """
    write_text [-noheader] [<filename>]

Write the selected modules, each preceded by a '# module: <name>' line unless
-noheader is given. Writes to standard output without a filename or with '-'.
"""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("text", "write modules as plain text", registry)

    def execute_sink(
        self, sink: StreamHandle | None, args: list[str], session: Session
    ) -> None:
        header = True
        argidx = 1
        while argidx < len(args):
            if args[argidx] == "-noheader":
                header = False
                argidx += 1
                continue
            break

        sink = self.resolve_sink(sink, args, argidx, session)
        for module in session.document.selected_modules():
            if header:
                sink.stream.write(f"# module: {module.name}\n")
            for line in module.lines:
                sink.stream.write(line + "\n")


class CleanCommand(Command):
    help_text = """
    clean [-purge]

Remove empty modules from the selection. With -purge, blank lines are removed
first, so modules holding only blank lines are removed as well.
"""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("clean", "remove empty modules", registry)

    def execute(self, args: list[str], session: Session) -> None:
        purge = False
        argidx = 1
        while argidx < len(args):
            if args[argidx] == "-purge":
                purge = True
                argidx += 1
                continue
            break
        self.extra_args(args, argidx, session)

        document = session.document
        removed = 0
        for module in document.selected_modules():
            if purge:
                module.lines = [line for line in module.lines if line.strip()]
            if module.is_empty and module.name != document.active_target:
                document.remove_module(module.name)
                removed += 1

        if removed:
            session.write(f"Removed {removed} empty module(s).")


class ListCommand(Command):
    help_text = """
    ls

List the selected modules and their line counts.
"""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        super().__init__("ls", "list modules in the current selection", registry)

    def execute(self, args: list[str], session: Session) -> None:
        self.extra_args(args, 1, session)
        modules = session.document.selected_modules()
        session.write(f"{len(modules)} module(s):")
        for module in modules:
            session.write(f"  {module.name} ({len(module.lines)} lines)")


def register_stock(registry: CommandRegistry) -> None:
    """Queue the stock commands on ``registry``."""
    ReadTextFrontend(registry)
    WriteTextBackend(registry)
    CleanCommand(registry)
    ListCommand(registry)
