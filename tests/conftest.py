"""Pytest configuration and fixtures for passcore tests."""

import logging
import tempfile
from pathlib import Path

import pytest

from passcore.backend import Backend
from passcore.builtins import register_builtins
from passcore.document import Document, Module, Selection
from passcore.errors import CommandError
from passcore.frontend import Frontend
from passcore.registry import Command, CommandRegistry
from passcore.session import Session


class RecordingCommand(Command):
    """Generic command that records every invocation."""

    def __init__(self, name, calls, registry=None):
        super().__init__(name, f"record calls to {name}", registry)
        self.calls = calls

    def execute(self, args, session):
        self.calls.append(
            {
                "args": list(args),
                "depth": len(session.document.selection_stack),
                "target": session.document.active_target,
                "selection": session.document.selection,
            }
        )


class PushingCommand(Command):
    """Pushes selections without popping them, optionally failing afterwards."""

    def __init__(self, name, pushes, fail=False, registry=None):
        super().__init__(name, "push selections", registry)
        self.pushes = pushes
        self.fail = fail

    def execute(self, args, session):
        for _ in range(self.pushes):
            session.document.selection_stack.append(Selection.of("a"))
        if self.fail:
            raise CommandError(f"{self.name} failed")


class RecordingFrontend(Frontend):
    """Frontend that records the resolved source and its content."""

    def __init__(self, calls, registry=None):
        super().__init__("rec", "record frontend", registry)
        self.calls = calls

    def execute_source(self, source, args, session):
        source = self.resolve_source(source, args, 1, session)
        self.calls.append(
            {
                "args": list(args),
                "name": source.name,
                "content": source.stream.read(),
                "here_document": session.last_here_document,
                "stream": source.stream,
            }
        )


class RecordingBackend(Backend):
    """Backend that writes a fixed payload and records the sink."""

    def __init__(self, calls, registry=None):
        super().__init__("rec", "record backend", registry)
        self.calls = calls

    def execute_sink(self, sink, args, session):
        sink = self.resolve_sink(sink, args, 1, session)
        sink.stream.write("payload\n")
        self.calls.append({"args": list(args), "name": sink.name, "stream": sink.stream})


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo logging.disable() calls made by setup_logging()."""
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def root_handlers():
    """Restore root logger handlers replaced by setup_logging()."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def calls():
    """Shared invocation log for recording commands."""
    return []


@pytest.fixture
def registry(calls):
    """Registry with built-ins and recording commands."""
    registry = CommandRegistry()
    register_builtins(registry)
    for name in ("a", "b", "c", "clean"):
        RecordingCommand(name, calls, registry)
    PushingCommand("push", 2, registry=registry)
    PushingCommand("push_fail", 3, fail=True, registry=registry)
    RecordingFrontend(calls, registry)
    RecordingBackend(calls, registry)
    registry.register_all()
    return registry


@pytest.fixture
def document():
    """Document with two small modules."""
    doc = Document()
    doc.add_module(Module("a", ["alpha"]))
    doc.add_module(Module("b", ["beta", ""]))
    return doc


@pytest.fixture
def session(registry, document, capsys):
    """Session over the recording registry, writing to captured stdout."""
    return Session(registry=registry, document=document)


@pytest.fixture
def text_file(temp_dir):
    """Create a text file and return its path."""

    def _make(name, content):
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _make
