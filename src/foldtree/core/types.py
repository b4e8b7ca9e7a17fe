"""
Core type definitions for FoldTree.

This module contains the type aliases shared by the document model, the
node-type catalogue and the history store.
"""

from collections.abc import Callable, Sequence
from typing import Any

NodeId = str

TypeTag = str

FieldMap = dict[str, Any]

PathKey = str | int

FieldPath = Sequence[PathKey]

ContainmentPolicy = Callable[[TypeTag, TypeTag], bool]

IdFactory = Callable[[], NodeId]
