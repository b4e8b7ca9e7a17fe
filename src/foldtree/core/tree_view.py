"""
Nested tree view handed to render layers.

This module contains the TreeView model produced by `Document.to_tree()`.
Unlike the flat snapshot, children are resolved into nested views and the
internal parent linkage is left out.
"""

from typing import Any

from pydantic import BaseModel, Field


class TreeView(BaseModel):
    """
    Caller-facing nested view of a node and its resolved children.

    Render layers consume this model directly or through `model_dump()`.
    """

    id: str
    type: str
    fields: dict[str, Any] = Field(default_factory=dict)
    children: list["TreeView"] = Field(default_factory=list)

    def find(self, node_id: str) -> "TreeView | None":
        """Find a view by id in this subtree, depth-first."""
        if self.id == node_id:
            return self
        for child in self.children:
            found = child.find(node_id)
            if found is not None:
                return found
        return None

    def shape(self) -> tuple:
        """Return the id structure as nested `(id, (children...))` tuples."""
        return (self.id, tuple(child.shape() for child in self.children))
