"""
Document model for FoldTree.

This package contains the versioned Document, its invariant checks and the
copy-on-write path helpers used by nested field edits.
"""

from foldtree.document.model import Document, PendingAdd, PendingMove
from foldtree.document.paths import set_in
from foldtree.document.validation import ensure_well_formed, find_invariant_issues

__all__ = [
    "Document",
    "PendingAdd",
    "PendingMove",
    "set_in",
    "ensure_well_formed",
    "find_invariant_issues",
]
