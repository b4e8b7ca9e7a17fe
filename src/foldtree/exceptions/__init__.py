"""
FoldTree exception classes.

This package provides all exception types raised by the document model and
history store for consistent error handling and reporting.
"""

from foldtree.exceptions.core import (
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

__all__ = [
    "FoldTreeError",
    "NodeNotFoundError",
    "ParentNotFoundError",
    "ContainmentViolationError",
    "InvalidOperationError",
    "CyclicMoveRejectedError",
    "InvalidPathError",
    "HistoryError",
    "UnknownFieldError",
    "UnknownNodeTypeError",
    "StructuralInvariantError",
]
