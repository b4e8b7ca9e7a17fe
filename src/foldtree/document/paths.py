"""
Copy-on-write updates at nested paths.

`set_in` rebuilds only the containers along a path of string/integer keys
and reuses every sibling value unchanged, so the original structure is never
modified and unchanged branches are shared with the result.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from foldtree.core.types import PathKey
from foldtree.exceptions import InvalidPathError


def set_in(container: Any, path: Sequence[PathKey], value: Any) -> Any:
    """
    Return a copy of `container` with `value` stored at `path`.

    Mappings are rebuilt as dicts, lists and tuples keep their type. Missing
    string keys along the way are created as empty dicts.

    Params:
        container: Root mapping or sequence
        path: Keys to follow; strings index mappings, integers index sequences
        value: Value to store at the end of the path

    Returns:
        New container, or `value` itself when `path` is empty

    Raises:
        InvalidPathError: If a key cannot be applied to the value it meets

    Examples:
        set_in({"a": {"b": 1}}, ["a", "c"], 2) -> {"a": {"b": 1, "c": 2}}
        set_in({"a": [1, 2]}, ["a", 1], 3) -> {"a": [1, 3]}
    """
    path = tuple(path)
    return _set_in(container, path, 0, value)


def _set_in(container: Any, path: tuple, depth: int, value: Any) -> Any:
    if depth == len(path):
        return value

    key = path[depth]
    if container is None:
        if not isinstance(key, str):
            raise InvalidPathError(
                path, f"missing level at depth {depth} can only be created for a field name, got {key!r}"
            )
        container = {}

    if isinstance(container, Mapping):
        child = container.get(key)
        updated = dict(container)
        updated[key] = _set_in(child, path, depth + 1, value)
        return updated

    if _is_sequence(container):
        if not isinstance(key, int) or isinstance(key, bool):
            raise InvalidPathError(path, f"sequence at depth {depth} needs an integer index, got {key!r}")
        if not -len(container) <= key < len(container):
            raise InvalidPathError(path, f"index {key} out of range at depth {depth}")
        items = list(container)
        items[key] = _set_in(items[key], path, depth + 1, value)
        return tuple(items) if isinstance(container, tuple) else items

    raise InvalidPathError(
        path, f"cannot descend into {type(container).__name__} at depth {depth}"
    )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
