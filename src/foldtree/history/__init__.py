"""
Snapshot history for FoldTree documents.

This package provides the generic linear undo/redo store used by the
document model.
"""

from foldtree.history.store import HistoryStore

__all__ = ["HistoryStore"]
