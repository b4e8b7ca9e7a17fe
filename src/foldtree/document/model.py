"""
Versioned tree document with structural edits and undo/redo.

This module contains the Document class. Every mutating call reads the
current snapshot, builds a new snapshot with only the touched nodes
replaced, checks tree invariants and pushes the result into the history
store. A failing call raises before anything is pushed, so history is never
left half-updated.
"""

import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, TypeVar

from attrs import evolve

from foldtree.config import DocumentConfig
from foldtree.core import DocumentSnapshot, FieldPath, Node, NodeId, TreeView
from foldtree.document.paths import set_in
from foldtree.document.validation import ensure_well_formed
from foldtree.exceptions import (
    ContainmentViolationError,
    CyclicMoveRejectedError,
    InvalidOperationError,
    InvalidPathError,
    NodeNotFoundError,
    ParentNotFoundError,
)
from foldtree.history import HistoryStore

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class PendingAdd:
    """Second phase of `Document.add`: a created but not yet attached node."""

    document: "Document"
    node: Node

    @property
    def node_id(self) -> NodeId:
        return self.node.id

    def into(self, parent_id: NodeId, index: int | None = None) -> NodeId:
        """
        Attach the node under `parent_id` and record the edit.

        Params:
            parent_id: Identifier of the new parent
            index: Position among the parent's children. None or an
                out-of-range value appends at the end.

        Returns:
            Identifier of the attached node

        Raises:
            ParentNotFoundError: If the parent does not exist
            ContainmentViolationError: If the parent type cannot hold this node type
            InvalidOperationError: If this node was already attached
        """
        return self.document._attach_new(self.node, parent_id, index)


@dataclass(frozen=True)
class PendingMove:
    """Second phase of `Document.move`."""

    document: "Document"
    node_id: NodeId

    def into(self, new_parent_id: NodeId, index: int | None = None) -> None:
        """
        Re-attach the node under `new_parent_id` and record the edit.

        Params:
            new_parent_id: Identifier of the destination parent
            index: Position among the destination's children after the node
                has been detached. None or an out-of-range value appends.

        Raises:
            NodeNotFoundError: If the moved node does not exist
            ParentNotFoundError: If the destination does not exist
            CyclicMoveRejectedError: If the destination is the node or one of its descendants
            ContainmentViolationError: If the destination type cannot hold this node type
        """
        self.document._move_existing(self.node_id, new_parent_id, index)


class Document:
    """Hierarchical UI-builder document with linear undo/redo.

    Responsibilities:
      - Own the node tree through immutable snapshots kept in a HistoryStore.
      - Apply structural edits (add, remove, move) and field edits.
      - Enforce containment rules from the configured NodeCatalogue.
      - Group edits into transactions that undo as one step and roll back
        completely on failure.

    Notes:
      - Single writer: one caller edits a Document at a time. During an open
        transaction `current` already reflects in-transaction edits.
      - Nodes returned by `get_node` are shared with recorded history; treat
        their `fields` as read-only. Use `export_snapshot` for a mutable copy.
    """

    def __init__(self, config: DocumentConfig | None = None):
        self.config = config or DocumentConfig()
        catalogue = self.config.catalogue
        catalogue.check_type(self.config.root_type)
        catalogue.check_fields(self.config.root_type, self.config.root_fields)

        root = self._create_node(self.config.root_type, self.config.root_fields)
        snapshot = DocumentSnapshot(
            root_id=root.id,
            nodes={root.id: root},
            selection=root.id,
        )
        self._history: HistoryStore[DocumentSnapshot] = HistoryStore(
            snapshot, limit=self.config.history_limit
        )

    # Reads

    @property
    def snapshot(self) -> DocumentSnapshot:
        """Current immutable snapshot."""
        return self._history.current()

    @property
    def history(self) -> HistoryStore[DocumentSnapshot]:
        return self._history

    @property
    def root_id(self) -> NodeId:
        return self.snapshot.root_id

    @property
    def selection(self) -> NodeId | None:
        """Selected node id, or None when the stored id is not in this version."""
        snapshot = self.snapshot
        if snapshot.selection is not None and snapshot.selection not in snapshot:
            return None
        return snapshot.selection

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def get_node(self, node_id: NodeId) -> Node | None:
        return self.snapshot.get(node_id)

    def export_snapshot(self) -> dict[str, Any]:
        """
        Export the current snapshot as independent plain data.

        Returns:
            Dict with `root_id`, `nodes` and `selection`; callers may mutate it freely
        """
        return self.snapshot.to_dict()

    def to_tree(self) -> TreeView:
        """
        Build the nested view of the current tree for render layers.

        Returns:
            TreeView rooted at the document root

        Raises:
            NodeNotFoundError: If a child reference is dangling
        """
        nodes = self.snapshot.nodes

        def build(node_id: NodeId) -> TreeView:
            node = nodes.get(node_id)
            if node is None:
                raise NodeNotFoundError(node_id, "is referenced but missing from the tree")
            return TreeView(
                id=node.id,
                type=node.type,
                fields=copy.deepcopy(node.fields),
                children=[build(child_id) for child_id in node.child_ids],
            )

        return build(self.root_id)

    def iter_nodes(self) -> Iterator[Node]:
        """Yield nodes of the current tree depth-first, parents before children."""
        nodes = self.snapshot.nodes
        stack = [self.root_id]
        while stack:
            node = nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.child_ids))

    def descendants(self, node_id: NodeId) -> list[NodeId]:
        """
        List every descendant of a node in depth-first pre-order.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        snapshot = self.snapshot
        self._require(snapshot, node_id)
        return self._subtree_ids(snapshot, node_id)[1:]

    def ancestors(self, node_id: NodeId) -> list[NodeId]:
        """
        List the ancestors of a node, nearest parent first, ending at the root.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        snapshot = self.snapshot
        node = self._require(snapshot, node_id)
        chain = []
        while node.parent_id is not None:
            chain.append(node.parent_id)
            node = self._require(snapshot, node.parent_id)
        return chain

    # Structural edits

    def add(self, node_type: str | Mapping[str, Any], fields: Mapping[str, Any] | None = None) -> PendingAdd:
        """
        Create a detached node; attach it with `.into(parent_id, index)`.

        The node type may be given as a tag plus a field mapping, or as a
        single mapping with a "type" key whose other keys are fields.
        Schema defaults are applied first and caller fields overlay them.
        Creating the node has no effect on the document.

        Params:
            node_type: Type tag, or mapping with "type" and field entries
            fields: Initial field values when `node_type` is a tag

        Returns:
            PendingAdd whose `into` attaches the node

        Raises:
            UnknownNodeTypeError: If a strict catalogue does not declare the type
            UnknownFieldError: If a field is not in the type's schema
        """
        if isinstance(node_type, Mapping):
            spec = dict(node_type)
            if "type" not in spec:
                raise InvalidOperationError("Node mapping needs a 'type' entry")
            type_tag = spec.pop("type")
            fields = {**spec, **(fields or {})}
        else:
            type_tag = node_type

        catalogue = self.config.catalogue
        catalogue.check_type(type_tag)
        catalogue.check_fields(type_tag, (fields or {}).keys())
        return PendingAdd(self, self._create_node(type_tag, fields))

    def remove(self, node_id: NodeId) -> None:
        """
        Remove a node and its entire subtree.

        Removing the root is silently ignored. A selection pointing inside
        the removed subtree is cleared.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        snapshot = self.snapshot
        if node_id == snapshot.root_id:
            return
        node = self._require(snapshot, node_id)

        removed = self._subtree_ids(snapshot, node_id)
        updated = []
        parent = snapshot.get(node.parent_id) if node.parent_id is not None else None
        if parent is not None:
            updated.append(
                parent.with_children(c for c in parent.child_ids if c != node_id)
            )

        next_snapshot = snapshot.replace_nodes(*updated, removed=removed)
        if snapshot.selection in removed:
            next_snapshot = next_snapshot.with_selection(None)
        self._commit(next_snapshot, "remove")

    def move(self, node_id: NodeId) -> PendingMove:
        """
        Start moving a node; complete with `.into(new_parent_id, index)`.

        Raises:
            InvalidOperationError: If `node_id` is the root
        """
        if node_id == self.root_id:
            raise InvalidOperationError("Cannot move root node")
        return PendingMove(self, node_id)

    # Field edits

    def update_field(self, node_id: NodeId, field_name: str, value: Any) -> None:
        """
        Replace a field value wholesale.

        Raises:
            NodeNotFoundError: If the node does not exist
            UnknownFieldError: If the field is not in the node type's schema
        """
        snapshot = self.snapshot
        node = self._require(snapshot, node_id)
        self.config.catalogue.check_fields(node.type, [field_name])
        updated = node.with_field(field_name, copy.deepcopy(value))
        self._commit(snapshot.replace_nodes(updated), "update_field")

    def patch_field(self, node_id: NodeId, field_name: str, partial: Mapping[str, Any]) -> None:
        """
        Shallow-merge `partial` over a mapping-valued field.

        Keys absent from `partial` keep their values. A missing field counts
        as an empty mapping.

        Raises:
            NodeNotFoundError: If the node does not exist
            UnknownFieldError: If the field is not in the node type's schema
            InvalidOperationError: If the field value or `partial` is not a mapping
        """
        snapshot = self.snapshot
        node = self._require(snapshot, node_id)
        self.config.catalogue.check_fields(node.type, [field_name])

        existing = node.fields.get(field_name)
        if existing is None:
            existing = {}
        if not isinstance(existing, Mapping):
            raise InvalidOperationError(
                f"Field '{field_name}' of '{node_id}' is {type(existing).__name__}, not a mapping"
            )
        if not isinstance(partial, Mapping):
            raise InvalidOperationError(
                f"Patch for '{field_name}' must be a mapping, got {type(partial).__name__}"
            )

        merged = {**existing, **copy.deepcopy(dict(partial))}
        updated = node.with_field(field_name, merged)
        self._commit(snapshot.replace_nodes(updated), "patch_field")

    def patch_path(self, node_id: NodeId, path: FieldPath, value: Any) -> Node:
        """
        Set a value at a nested path inside a node's fields.

        The first key names the field; further keys index into nested
        mappings (strings) and sequences (integers). Only containers along
        the path are rebuilt.

        Params:
            node_id: Node to update
            path: Keys from the field name down to the target
            value: Value to store

        Returns:
            The updated node, or the unchanged node when `path` is empty

        Raises:
            NodeNotFoundError: If the node does not exist
            UnknownFieldError: If the field is not in the node type's schema
            InvalidPathError: If the path cannot be followed
        """
        snapshot = self.snapshot
        node = self._require(snapshot, node_id)
        path = tuple(path)
        if not path:
            return node
        if not isinstance(path[0], str):
            raise InvalidPathError(path, "first key must be a field name")
        self.config.catalogue.check_fields(node.type, [path[0]])

        fields = set_in(node.fields, path, copy.deepcopy(value))
        updated = evolve(node, fields=fields)
        self._commit(snapshot.replace_nodes(updated), "patch_path")
        return updated

    def select(self, node_id: NodeId | None) -> None:
        """Record a new selection. The id is not checked against this version."""
        self._commit(self.snapshot.with_selection(node_id), "select")

    # History

    def undo(self) -> bool:
        """Step back one edit; return whether anything changed."""
        return self._history.undo() is not None

    def redo(self) -> bool:
        """Re-apply one undone edit; return whether anything changed."""
        return self._history.redo() is not None

    @contextmanager
    def transaction(self) -> Iterator["Document"]:
        """
        Group the edits made inside the block into one undo step.

        On an exception the document returns to the state it had when the
        block was entered and the exception propagates. Blocks nest: only
        the outermost block records a history entry, and a failing inner
        block only discards its own edits.
        """
        outermost = not self._history.in_transaction
        if outermost:
            self._history.begin_transaction()
        savepoint = self._history.current()
        try:
            yield self
        except BaseException as exc:
            if outermost:
                self._history.rollback_transaction()
            else:
                # pushes inside an open transaction only move `present`
                self._history.push(savepoint)
            logger.debug("Transaction rolled back after %s", type(exc).__name__)
            raise
        if outermost:
            self._history.commit_transaction()

    def run_transaction(self, fn: Callable[[], R]) -> R:
        """
        Run `fn` as one transaction and return its result.

        Raises:
            Whatever `fn` raises, after the document has been rolled back
        """
        with self.transaction():
            return fn()

    # Internals

    def _create_node(self, type_tag: str, fields: Mapping[str, Any] | None) -> Node:
        seeded = self.config.catalogue.default_fields(type_tag)
        seeded.update(copy.deepcopy(dict(fields or {})))
        return Node(id=self.config.id_factory(), type=type_tag, fields=seeded)

    def _attach_new(self, node: Node, parent_id: NodeId, index: int | None) -> NodeId:
        snapshot = self.snapshot
        if node.id in snapshot:
            raise InvalidOperationError(f"Node '{node.id}' is already attached")
        self._commit(self._attach(snapshot, node, parent_id, index), "add")
        return node.id

    def _move_existing(self, node_id: NodeId, new_parent_id: NodeId, index: int | None) -> None:
        snapshot = self.snapshot
        if node_id == snapshot.root_id:
            raise InvalidOperationError("Cannot move root node")
        self._require(snapshot, node_id)
        if new_parent_id == node_id or new_parent_id in self._subtree_ids(snapshot, node_id):
            raise CyclicMoveRejectedError(node_id, new_parent_id)

        detached = self._detach(snapshot, node_id)
        self._commit(
            self._attach(detached, detached.nodes[node_id], new_parent_id, index), "move"
        )

    def _attach(
        self,
        snapshot: DocumentSnapshot,
        node: Node,
        parent_id: NodeId,
        index: int | None,
    ) -> DocumentSnapshot:
        parent = snapshot.get(parent_id)
        if parent is None:
            raise ParentNotFoundError(parent_id)
        if not self.config.catalogue.can_contain(parent.type, node.type):
            raise ContainmentViolationError(parent.type, node.type)

        children = list(parent.child_ids)
        if index is None or index < 0 or index > len(children):
            children.append(node.id)
        else:
            children.insert(index, node.id)
        return snapshot.replace_nodes(
            parent.with_children(children), node.with_parent(parent_id)
        )

    def _detach(self, snapshot: DocumentSnapshot, node_id: NodeId) -> DocumentSnapshot:
        node = snapshot.nodes[node_id]
        updated = [node.with_parent(None)]
        parent = snapshot.get(node.parent_id) if node.parent_id is not None else None
        if parent is not None:
            updated.append(
                parent.with_children(c for c in parent.child_ids if c != node_id)
            )
        return snapshot.replace_nodes(*updated)

    def _commit(self, snapshot: DocumentSnapshot, operation: str) -> None:
        if self.config.validate_snapshots:
            ensure_well_formed(snapshot, operation)
        self._history.push(snapshot)
        logger.debug("Document %s recorded (%d nodes)", operation, len(snapshot))

    @staticmethod
    def _require(snapshot: DocumentSnapshot, node_id: NodeId) -> Node:
        node = snapshot.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    @staticmethod
    def _subtree_ids(snapshot: DocumentSnapshot, node_id: NodeId) -> list[NodeId]:
        """Return `node_id` and all of its descendants in depth-first pre-order."""
        ordered = []
        stack = [node_id]
        while stack:
            current = stack.pop()
            ordered.append(current)
            node = snapshot.get(current)
            if node is not None:
                stack.extend(reversed(node.child_ids))
        return ordered
