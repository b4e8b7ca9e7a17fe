"""
Tests for exception classes and their messages.

This module checks the attributes each error carries and the hierarchy
callers rely on when catching broadly.
"""

from foldtree.exceptions import (
    ContainmentViolationError,
    CyclicMoveRejectedError,
    FoldTreeError,
    HistoryError,
    InvalidOperationError,
    InvalidPathError,
    NodeNotFoundError,
    ParentNotFoundError,
    StructuralInvariantError,
    UnknownFieldError,
    UnknownNodeTypeError,
)


class TestHierarchy:
    """Tests for exception inheritance."""

    def test_everything_is_a_foldtree_error(self):
        for error_type in (
            NodeNotFoundError,
            ParentNotFoundError,
            ContainmentViolationError,
            InvalidOperationError,
            CyclicMoveRejectedError,
            InvalidPathError,
            HistoryError,
            UnknownFieldError,
            UnknownNodeTypeError,
            StructuralInvariantError,
        ):
            assert issubclass(error_type, FoldTreeError)

    def test_specialisations(self):
        assert issubclass(ParentNotFoundError, NodeNotFoundError)
        assert issubclass(CyclicMoveRejectedError, InvalidOperationError)
        assert issubclass(InvalidPathError, InvalidOperationError)
        assert issubclass(HistoryError, InvalidOperationError)


class TestMessages:
    """Tests for error attributes and formatting."""

    def test_node_not_found(self):
        error = NodeNotFoundError("n7")
        assert error.node_id == "n7"
        assert str(error) == "Node 'n7' does not exist"

    def test_parent_not_found(self):
        error = ParentNotFoundError("p1")
        assert error.parent_id == "p1"
        assert error.node_id == "p1"
        assert "cannot be used as parent" in str(error)

    def test_containment_violation(self):
        error = ContainmentViolationError("list", "text")
        assert str(error) == "'list' cannot contain 'text'"

    def test_cyclic_move_into_self(self):
        error = CyclicMoveRejectedError("a", "a")
        assert "its own parent" in str(error)

    def test_cyclic_move_into_descendant(self):
        error = CyclicMoveRejectedError("a", "c")
        assert error.node_id == "a"
        assert "'c' is a descendant of 'a'" in str(error)

    def test_invalid_path(self):
        error = InvalidPathError(("style", 3), "index 3 out of range at depth 1")
        assert error.path == ("style", 3)
        assert str(error) == "Invalid path ['style', 3]: index 3 out of range at depth 1"

    def test_unknown_field_without_known_list(self):
        error = UnknownFieldError("text", "colour")
        assert error.known == []
        assert str(error) == "Field 'colour' is not declared for node type 'text'"

    def test_unknown_node_type(self):
        error = UnknownNodeTypeError("video", ["text", "image"])
        assert "Available types: ['image', 'text']" in str(error)

    def test_structural_invariant(self):
        error = StructuralInvariantError(["a", "b"], "remove")
        assert error.issues == ["a", "b"]
        assert str(error) == "Structural issues after remove: a; b"
