"""
Core FoldTree components.

This package provides the immutable node and snapshot records, the nested
tree view and the shared type aliases.
"""

from foldtree.core.node import DocumentSnapshot, Node
from foldtree.core.tree_view import TreeView
from foldtree.core.types import (
    ContainmentPolicy,
    FieldMap,
    FieldPath,
    IdFactory,
    NodeId,
    PathKey,
    TypeTag,
)

__all__ = [
    "Node",
    "DocumentSnapshot",
    "TreeView",
    "NodeId",
    "TypeTag",
    "FieldMap",
    "FieldPath",
    "PathKey",
    "ContainmentPolicy",
    "IdFactory",
]
