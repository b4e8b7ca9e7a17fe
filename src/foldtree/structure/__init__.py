"""
Node-type catalogue and identifier schemes.

This package contains the pluggable configuration the document model
consults when creating and attaching nodes.
"""

from foldtree.structure.catalogue import (
    NodeCatalogue,
    NodeTypeSpec,
    reference_catalogue,
    reference_containment_policy,
)
from foldtree.structure.identifiers import CounterIds, uuid_ids

__all__ = [
    "NodeCatalogue",
    "NodeTypeSpec",
    "reference_catalogue",
    "reference_containment_policy",
    "CounterIds",
    "uuid_ids",
]
