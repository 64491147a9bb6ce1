"""Registry and session construction for the CLI and embedding callers."""

from __future__ import annotations

from typing import TextIO

from passcore.builtins import register_builtins
from passcore.document import Document
from passcore.registry import CommandRegistry
from passcore.session import Session
from passcore.stock import register_stock


def build_registry(include_stock: bool = True) -> CommandRegistry:
    """Create a registry holding the built-in (and stock) commands."""
    registry = CommandRegistry()
    register_builtins(registry)
    if include_stock:
        register_stock(registry)
    registry.register_all()
    return registry


def new_session(
    registry: CommandRegistry | None = None,
    document: Document | None = None,
    out: TextIO | None = None,
    echo: bool = False,
) -> Session:
    """Create a session over ``document`` (a fresh one by default)."""
    return Session(
        registry=registry if registry is not None else build_registry(),
        document=document if document is not None else Document(),
        echo=echo,
        out=out,
    )
