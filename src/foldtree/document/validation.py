"""
Tree invariant checks for document snapshots.

A well-formed snapshot contains its root, the root has no parent, every
child link is mirrored by the child's parent link exactly once, and every
node is reachable from the root without cycles. Selection is not checked:
a selection may point at a node that only exists in another version.
"""

from foldtree.core import DocumentSnapshot
from foldtree.exceptions import StructuralInvariantError


def find_invariant_issues(snapshot: DocumentSnapshot) -> list[str]:
    """
    Collect every structural invariant violation in a snapshot.

    Params:
        snapshot: Snapshot to inspect

    Returns:
        Human-readable issue descriptions, empty when the snapshot is well-formed
    """
    issues: list[str] = []
    nodes = snapshot.nodes
    root = nodes.get(snapshot.root_id)

    if root is None:
        return [f"root '{snapshot.root_id}' is missing"]
    if root.parent_id is not None:
        issues.append(f"root '{root.id}' has parent '{root.parent_id}'")

    for node_id, node in nodes.items():
        if node.id != node_id:
            issues.append(f"node stored under '{node_id}' has id '{node.id}'")

        seen: set[str] = set()
        for child_id in node.child_ids:
            if child_id in seen:
                issues.append(f"'{child_id}' listed more than once under '{node_id}'")
                continue
            seen.add(child_id)
            child = nodes.get(child_id)
            if child is None:
                issues.append(f"'{node_id}' references missing child '{child_id}'")
            elif child.parent_id != node_id:
                issues.append(
                    f"'{child_id}' is a child of '{node_id}' but points at '{child.parent_id}'"
                )

        if node_id == snapshot.root_id:
            continue
        if node.parent_id is None:
            issues.append(f"'{node_id}' has no parent")
            continue
        parent = nodes.get(node.parent_id)
        if parent is None:
            issues.append(f"'{node_id}' points at missing parent '{node.parent_id}'")
        elif node_id not in parent.child_ids:
            issues.append(f"'{node_id}' is not listed by its parent '{node.parent_id}'")

    reached: set[str] = set()
    stack = [snapshot.root_id]
    while stack:
        node_id = stack.pop()
        if node_id in reached:
            issues.append(f"cycle or shared subtree detected at '{node_id}'")
            continue
        reached.add(node_id)
        node = nodes.get(node_id)
        if node is not None:
            stack.extend(child for child in node.child_ids if child in nodes)

    unreachable = sorted(set(nodes) - reached)
    for node_id in unreachable:
        issues.append(f"'{node_id}' is not reachable from root")

    return issues


def ensure_well_formed(snapshot: DocumentSnapshot, operation: str = "snapshot") -> None:
    """
    Raise if a snapshot breaks any tree invariant.

    Params:
        snapshot: Snapshot to inspect
        operation: Name of the operation that produced it, for the error message

    Raises:
        StructuralInvariantError: If any issue is found
    """
    issues = find_invariant_issues(snapshot)
    if issues:
        raise StructuralInvariantError(issues, operation)
