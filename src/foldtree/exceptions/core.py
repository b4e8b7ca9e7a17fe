"""
Exception classes for FoldTree document editing.

This module defines specific exception types for the error conditions that
can occur while editing a document tree: missing nodes, containment rule
violations, structurally disallowed operations and schema mismatches.
Every error is raised before a snapshot is pushed into history.
"""


class FoldTreeError(Exception):
    """Base exception for all FoldTree-related errors."""

    pass


class NodeNotFoundError(FoldTreeError):
    """Raised when a node id is absent from the current snapshot."""

    def __init__(self, node_id: str, message: str = "does not exist"):
        """
        Initialize the exception.

        Params:
            node_id: The id that could not be resolved
            message: Specific error message
        """
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' {message}")


class ParentNotFoundError(NodeNotFoundError):
    """Raised when the attach target of an add or move is absent."""

    def __init__(self, parent_id: str):
        """
        Initialize the exception.

        Params:
            parent_id: The parent id that could not be resolved
        """
        self.parent_id = parent_id
        super().__init__(parent_id, "cannot be used as parent: not found")


class ContainmentViolationError(FoldTreeError):
    """Raised when the containment policy rejects a parent/child pair."""

    def __init__(self, parent_type: str, child_type: str):
        """
        Initialize the exception.

        Params:
            parent_type: Type tag of the would-be parent
            child_type: Type tag of the rejected child
        """
        self.parent_type = parent_type
        self.child_type = child_type
        super().__init__(f"'{parent_type}' cannot contain '{child_type}'")


class InvalidOperationError(FoldTreeError):
    """Raised when an action is structurally disallowed."""

    def __init__(self, message: str):
        """
        Initialize the exception.

        Params:
            message: Error message describing the rejected operation
        """
        super().__init__(message)


class CyclicMoveRejectedError(InvalidOperationError):
    """Raised when a node would be moved into itself or its own subtree."""

    def __init__(self, node_id: str, new_parent_id: str):
        """
        Initialize the exception.

        Params:
            node_id: The node being moved
            new_parent_id: The requested destination
        """
        self.node_id = node_id
        self.new_parent_id = new_parent_id
        if node_id == new_parent_id:
            reason = "a node cannot become its own parent"
        else:
            reason = f"'{new_parent_id}' is a descendant of '{node_id}'"
        super().__init__(f"Cannot move '{node_id}' into '{new_parent_id}': {reason}")


class InvalidPathError(InvalidOperationError):
    """Raised when a nested field path cannot be followed."""

    def __init__(self, path: tuple, reason: str):
        """
        Initialize the exception.

        Params:
            path: The offending path
            reason: Why the path is invalid
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {list(path)!r}: {reason}")


class HistoryError(InvalidOperationError):
    """Raised when history navigation is attempted inside an open transaction."""

    pass


class UnknownFieldError(FoldTreeError):
    """Raised when a field name is absent from the node type's field schema."""

    def __init__(self, type_tag: str, field_name: str, known: list[str] | None = None):
        """
        Initialize the exception.

        Params:
            type_tag: Type tag whose schema was consulted
            field_name: The unrecognized field name
            known: Field names the schema does declare
        """
        self.type_tag = type_tag
        self.field_name = field_name
        self.known = known or []
        message = f"Field '{field_name}' is not declared for node type '{type_tag}'"
        if self.known:
            message += f". Known fields: {', '.join(sorted(self.known))}"
        super().__init__(message)


class UnknownNodeTypeError(FoldTreeError):
    """Raised when a strict catalogue does not declare a type tag."""

    def __init__(self, type_tag: str, known: list[str] | None = None):
        """
        Initialize the exception.

        Params:
            type_tag: The undeclared type tag
            known: Type tags the catalogue does declare
        """
        self.type_tag = type_tag
        self.known = known or []
        super().__init__(
            f"Unknown node type '{type_tag}'. Available types: {sorted(self.known)}"
        )


class StructuralInvariantError(FoldTreeError):
    """Raised when a candidate snapshot breaks tree well-formedness."""

    def __init__(self, issues: list[str], operation: str = "snapshot"):
        """
        Initialize the exception.

        Params:
            issues: List of invariant violations found
            operation: The operation that produced the snapshot
        """
        self.issues = issues
        self.operation = operation
        issue_summary = "; ".join(issues)
        super().__init__(f"Structural issues after {operation}: {issue_summary}")
