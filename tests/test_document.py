"""Tests for the document model."""

import pytest

from passcore.document import Document, Module, Selection
from passcore.errors import ConsistencyViolationError


class TestSelection:
    """Test selection matching."""

    def test_default_selects_everything(self):
        """Test that the default selection matches any module."""
        assert Selection().selects("anything")

    def test_of_restricts_to_names(self):
        """Test that Selection.of matches only the named modules."""
        selection = Selection.of("a", "b")

        assert selection.selects("a")
        assert not selection.selects("c")

    def test_selections_compare_by_value(self):
        """Test that equal selections compare equal."""
        assert Selection.of("a") == Selection.of("a")


class TestDocument:
    """Test module bookkeeping and selection."""

    def test_starts_with_full_selection(self):
        """Test that a new document selects everything."""
        doc = Document()

        assert doc.selection_stack == [Selection()]
        assert doc.selection.full

    def test_add_duplicate_module(self, document):
        """Test that module names must be unique."""
        with pytest.raises(ValueError, match="Module already exists: a"):
            document.add_module(Module("a"))

    def test_selected_modules_follow_top_of_stack(self, document):
        """Test that the top selection decides which modules are selected."""
        assert [m.name for m in document.selected_modules()] == ["a", "b"]

        document.selection_stack.append(Selection.of("b"))

        assert [m.name for m in document.selected_modules()] == ["b"]

    def test_remove_module(self, document):
        """Test removing a module by name."""
        document.remove_module("a")

        assert list(document.modules) == ["b"]

    def test_module_is_empty(self):
        """Test that only modules without lines are empty."""
        assert Module("m").is_empty
        assert not Module("m", [""]).is_empty


class TestCheck:
    """Test consistency checks."""

    def test_consistent_document_passes(self, document):
        """Test that a consistent document passes the check."""
        document.active_target = "a"

        document.check()

    def test_empty_selection_stack(self, document):
        """Test that an empty selection stack is a violation."""
        document.selection_stack.clear()

        with pytest.raises(ConsistencyViolationError, match="Selection stack is empty"):
            document.check()

    def test_module_name_mismatch(self, document):
        """Test that a module registered under another name is a violation."""
        document.modules["a"].name = "z"

        with pytest.raises(ConsistencyViolationError, match="named 'z'"):
            document.check()

    def test_embedded_newline(self, document):
        """Test that a line holding a newline is a violation."""
        document.modules["b"].lines.append("x\ny")

        with pytest.raises(ConsistencyViolationError, match="embedded newline"):
            document.check()

    def test_dangling_active_target(self, document):
        """Test that an active target naming no module is a violation."""
        document.active_target = "gone"

        with pytest.raises(ConsistencyViolationError, match="Active target 'gone'"):
            document.check()
