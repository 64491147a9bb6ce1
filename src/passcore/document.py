"""Document model the command core operates on.

The command core only relies on the selection stack, the active target marker
and ``check()``. Modules hold plain text lines so the stock commands have
something to read, transform and write.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from passcore.errors import ConsistencyViolationError


@dataclass(frozen=True)
class Selection:
    """Which modules subsequent commands act on."""

    full: bool = True
    targets: frozenset[str] = frozenset()

    @classmethod
    def of(cls, *names: str) -> "Selection":
        """Selection restricted to exactly the named modules."""
        return cls(full=False, targets=frozenset(names))

    def selects(self, name: str) -> bool:
        return self.full or name in self.targets


@dataclass
class Module:
    """A named unit of the document."""

    name: str
    lines: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass
class Document:
    """Mutable document shared by every command of a session."""

    modules: dict[str, Module] = field(default_factory=dict)
    selection_stack: list[Selection] = field(default_factory=lambda: [Selection()])
    active_target: str | None = None

    @property
    def selection(self) -> Selection:
        """Active (top-of-stack) selection."""
        return self.selection_stack[-1]

    def add_module(self, module: Module) -> Module:
        if module.name in self.modules:
            raise ValueError(f"Module already exists: {module.name}")
        self.modules[module.name] = module
        return module

    def remove_module(self, name: str) -> None:
        del self.modules[name]

    def selected_modules(self) -> list[Module]:
        """Modules matched by the active selection, in name order."""
        selection = self.selection
        return [
            self.modules[name]
            for name in sorted(self.modules)
            if selection.selects(name)
        ]

    def check(self) -> None:
        """Validate internal invariants, raising on the first violation."""
        if not self.selection_stack:
            raise ConsistencyViolationError("Selection stack is empty")
        for name, module in self.modules.items():
            if module.name != name:
                raise ConsistencyViolationError(
                    f"Module registered as '{name}' is named '{module.name}'"
                )
            for line in module.lines:
                if "\n" in line:
                    raise ConsistencyViolationError(
                        f"Module '{name}' holds a line with an embedded newline"
                    )
        if self.active_target is not None and self.active_target not in self.modules:
            raise ConsistencyViolationError(
                f"Active target '{self.active_target}' is not a module"
            )
