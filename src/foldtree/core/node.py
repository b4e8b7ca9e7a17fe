"""
Immutable node and snapshot records.

Nodes and snapshots are frozen: an edit produces new records with
`attrs.evolve`, and the snapshot's node mapping is copied shallowly so
untouched nodes are shared between versions. Field payloads are never
modified in place once a node is recorded.
"""

import copy
from typing import Any

from attr import asdict
from attrs import evolve, field, frozen

from foldtree.core.types import FieldMap, NodeId, TypeTag


@frozen
class Node:
    """A single node of the document tree.

    Params:
        id: Identifier, unique within the document's lifetime
        type: Type tag looked up in the node-type catalogue
        parent_id: Parent identifier, None for the root and for detached nodes
        child_ids: Ordered child identifiers
        fields: Opaque payload (props, style, responsive variants, ...)
    """

    id: NodeId
    type: TypeTag
    parent_id: NodeId | None = None
    child_ids: tuple[NodeId, ...] = field(default=(), converter=tuple)
    fields: FieldMap = field(factory=dict)

    def with_children(self, child_ids) -> "Node":
        return evolve(self, child_ids=tuple(child_ids))

    def with_parent(self, parent_id: NodeId | None) -> "Node":
        return evolve(self, parent_id=parent_id)

    def with_field(self, name: str, value: Any) -> "Node":
        return evolve(self, fields={**self.fields, name: value})

    def to_dict(self) -> dict[str, Any]:
        """Return an independent plain-data copy of this node."""
        data = asdict(self, retain_collection_types=False)
        return copy.deepcopy(data)


@frozen
class DocumentSnapshot:
    """One complete version of the document tree plus selection state.

    Params:
        root_id: Identifier of the root node
        nodes: Mapping of identifier to node
        selection: Selected node id, or None
    """

    root_id: NodeId
    nodes: dict[NodeId, Node]
    selection: NodeId | None = None

    @property
    def root(self) -> Node:
        return self.nodes[self.root_id]

    def get(self, node_id: NodeId) -> Node | None:
        return self.nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def replace_nodes(self, *updated: Node, removed=()) -> "DocumentSnapshot":
        """
        Produce a new snapshot with some nodes replaced or removed.

        The node mapping is copied shallowly; every node not named here is
        shared with this snapshot.

        Params:
            *updated: Nodes to insert or overwrite, keyed by their id
            removed: Identifiers to drop from the mapping

        Returns:
            New DocumentSnapshot with the same root and selection
        """
        nodes = dict(self.nodes)
        for node_id in removed:
            nodes.pop(node_id, None)
        for node in updated:
            nodes[node.id] = node
        return evolve(self, nodes=nodes)

    def with_selection(self, selection: NodeId | None) -> "DocumentSnapshot":
        return evolve(self, selection=selection)

    def to_dict(self) -> dict[str, Any]:
        """Return an independent plain-data copy of the whole snapshot."""
        return {
            "root_id": self.root_id,
            "nodes": {node_id: node.to_dict() for node_id, node in self.nodes.items()},
            "selection": self.selection,
        }
