"""
FoldTree - a versioned tree-document model for UI builders

FoldTree keeps a hierarchical node tree in immutable snapshots, enforces
per-type containment rules and offers linear undo/redo with atomic
transactions.
"""

from importlib.metadata import version

from foldtree.config import DocumentConfig
from foldtree.core import DocumentSnapshot, Node, TreeView
from foldtree.document import Document
from foldtree.history import HistoryStore
from foldtree.structure import (
    CounterIds,
    NodeCatalogue,
    NodeTypeSpec,
    reference_catalogue,
    reference_containment_policy,
)

__version__ = version("foldtree")

__all__ = [
    "__version__",
    "Document",
    "DocumentConfig",
    "DocumentSnapshot",
    "Node",
    "TreeView",
    "HistoryStore",
    "NodeCatalogue",
    "NodeTypeSpec",
    "CounterIds",
    "reference_catalogue",
    "reference_containment_policy",
]
