"""
Node-type catalogue: type tags, containment rules and field schemas.

The document model never hard-codes node types. It asks a NodeCatalogue
whether a parent type may hold a child type, which default fields a new node
receives, and which field names are writable.
"""

import copy
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from foldtree.core.types import ContainmentPolicy
from foldtree.exceptions import UnknownFieldError, UnknownNodeTypeError


class NodeTypeSpec(BaseModel):
    """
    Declaration of a single node type.

    Params:
        accepts: Child type tags this type may hold. None accepts any child,
            an empty list makes the type a leaf.
        fields: Field schema as field name -> default value. None leaves the
            field bag open; any name is writable.
    """

    accepts: list[str] | None = None
    fields: dict[str, Any] | None = None

    def can_contain(self, child_type: str) -> bool:
        if self.accepts is None:
            return True
        return child_type in self.accepts


class NodeCatalogue(BaseModel):
    """Registry of node types consulted at creation and attach time.

    Responsibilities:
      - Decide containment for a (parent type, child type) pair.
      - Seed default field values for new nodes.
      - Reject field names a type's schema does not declare.

    Notes:
      - Undeclared type tags are accepted with an open field bag and no
        containment restriction unless `strict` is set.
      - `containment`, when given, replaces the `accepts` lists entirely.
    """

    node_types: dict[str, NodeTypeSpec] = Field(default_factory=dict)
    strict: bool = False
    containment: ContainmentPolicy | None = None

    def spec_for(self, type_tag: str) -> NodeTypeSpec | None:
        return self.node_types.get(type_tag)

    def check_type(self, type_tag: str) -> None:
        """
        Validate that a type tag may be instantiated.

        Params:
            type_tag: Type tag to check

        Raises:
            UnknownNodeTypeError: If the catalogue is strict and does not declare the tag
        """
        if self.strict and type_tag not in self.node_types:
            raise UnknownNodeTypeError(type_tag, list(self.node_types))

    def can_contain(self, parent_type: str, child_type: str) -> bool:
        """
        Decide whether a parent type may hold a child type.

        Params:
            parent_type: Type tag of the parent
            child_type: Type tag of the child

        Returns:
            True if the pair is allowed
        """
        if self.containment is not None:
            return bool(self.containment(parent_type, child_type))
        spec = self.node_types.get(parent_type)
        if spec is None:
            return True
        return spec.can_contain(child_type)

    def default_fields(self, type_tag: str) -> dict[str, Any]:
        """
        Build independent copies of a type's default field values.

        Params:
            type_tag: Type tag of the node being created

        Returns:
            Fresh field mapping, empty when the type has no schema
        """
        spec = self.node_types.get(type_tag)
        if spec is None or spec.fields is None:
            return {}
        return copy.deepcopy(spec.fields)

    def check_fields(self, type_tag: str, names: Iterable[str]) -> None:
        """
        Validate field names against a type's schema.

        Params:
            type_tag: Type tag whose schema applies
            names: Field names a caller wants to write

        Raises:
            UnknownFieldError: On the first name the schema does not declare
        """
        spec = self.node_types.get(type_tag)
        if spec is None or spec.fields is None:
            return
        for name in names:
            if name not in spec.fields:
                raise UnknownFieldError(type_tag, name, list(spec.fields))


def reference_containment_policy(parent_type: str, child_type: str) -> bool:
    """Containment rule of the stock UI-builder node set, as a plain function.

    - "text" holds nothing.
    - "list" holds only "list-item".
    - "list-item" holds only "text" or "image".
    - Every other type holds anything.
    """
    if parent_type == "text":
        return False
    if parent_type == "list":
        return child_type == "list-item"
    if parent_type == "list-item":
        return child_type in ("text", "image")
    return True


def reference_catalogue() -> NodeCatalogue:
    """Build the catalogue for the stock UI-builder node set."""
    return NodeCatalogue(
        node_types={
            "fragment": NodeTypeSpec(),
            "text": NodeTypeSpec(accepts=[]),
            "image": NodeTypeSpec(),
            "list": NodeTypeSpec(accepts=["list-item"]),
            "list-item": NodeTypeSpec(accepts=["text", "image"]),
        }
    )
