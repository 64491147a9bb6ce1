"""Custom exception hierarchy for passcore.

User-facing failures derive from ``CommandError``: they abort the current
command line and are reported by whoever runs it. ``FatalError`` marks broken
internal contracts (duplicate registrations, inconsistent documents); the CLI
never recovers from those.
"""


class PasscoreError(Exception):
    """Base exception for app-specific failures."""


class CommandError(PasscoreError):
    """A command could not be run as written."""


class UnknownCommandError(CommandError):
    """No command is registered under the requested name."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"No such command: {name}")


class CommandSyntaxError(CommandError):
    """Options or arguments of a command line are malformed."""


class HereDocumentError(CommandSyntaxError):
    """A here-document could not be read."""


class UnexpectedEOFError(HereDocumentError):
    """The script source ended before the here-document marker line."""


class MissingMarkerError(HereDocumentError):
    """``<<`` was given without a marker."""


class CommandIOError(CommandError):
    """An input or output file could not be opened."""


class ShellCommandError(CommandError):
    """A shell escape exited with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"Shell command returned error code {returncode}.")


class FatalError(PasscoreError):
    """Internal contract violation; the process should stop."""


class DuplicateNameError(FatalError):
    """Two commands claim the same command or format name."""

    def __init__(self, table: str, name: str) -> None:
        self.table = table
        self.name = name
        super().__init__(f"Duplicate {table} name: {name}")


class ConsistencyViolationError(FatalError):
    """The document failed its consistency check."""


class InternalError(FatalError):
    """Registry or adapter state is not what the caller promised."""
