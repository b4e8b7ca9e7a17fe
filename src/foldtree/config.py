"""
Document configuration.

DocumentConfig bundles everything a Document needs from its environment:
the node-type catalogue, the root node's type, the identifier scheme and the
history retention bound. Configuration is passed in code and validated by
pydantic at construction.
"""

from typing import Any

from pydantic import BaseModel, Field

from foldtree.core.types import IdFactory
from foldtree.structure import NodeCatalogue, reference_catalogue, uuid_ids


class DocumentConfig(BaseModel):
    """Settings for a single Document instance.

    Params:
        root_type: Type tag of the root node created with a new document
        root_fields: Initial fields of the root node
        catalogue: Node-type catalogue supplying containment and field schemas
        history_limit: Maximum undo depth, None for unbounded history
        validate_snapshots: Check tree invariants on every candidate snapshot
        id_factory: Zero-argument callable returning fresh node identifiers
    """

    root_type: str = "fragment"
    root_fields: dict[str, Any] = Field(default_factory=dict)
    catalogue: NodeCatalogue = Field(default_factory=reference_catalogue)
    history_limit: int | None = Field(default=None, ge=1)
    validate_snapshots: bool = True
    id_factory: IdFactory = uuid_ids
