"""Identifier schemes for document nodes."""

import itertools
import uuid


def uuid_ids() -> str:
    """Return a random UUIDv4 string."""
    return str(uuid.uuid4())


class CounterIds:
    """Monotonic identifiers scoped to one document.

    Produces `"<prefix>1"`, `"<prefix>2"`, ... Use one instance per document;
    sharing an instance between documents is fine, two instances with the same
    prefix feeding one document are not.
    """

    def __init__(self, prefix: str = "n", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
