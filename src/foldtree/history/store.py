"""
Linear undo/redo history over immutable snapshots.

The store keeps a `present` value plus ordered `past` and `future` stacks.
An optional transaction mode lets several pushes collapse into one history
entry: while a transaction is open, pushes only advance `present`, and the
value captured when the transaction began is recorded on commit.
"""

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from foldtree.exceptions import HistoryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HistoryStore(Generic[T]):
    """Undo/redo stack with optional single-entry transactions.

    Values pushed into the store are treated as immutable; the store never
    copies or inspects them.

    Params:
        initial: Value that becomes the first `present`
        limit: Optional maximum number of `past` entries kept. The oldest
            entries are dropped once the bound is exceeded.
    """

    def __init__(self, initial: T, limit: int | None = None):
        if limit is not None and limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self._present = initial
        self._past: deque[T] = deque()
        self._future: deque[T] = deque()
        self._pending_base: T | None = None
        self._in_transaction = False
        self._limit = limit

    @property
    def past(self) -> tuple[T, ...]:
        """Recorded states before `present`, oldest first."""
        return tuple(self._past)

    @property
    def future(self) -> tuple[T, ...]:
        """Undone states, nearest future first."""
        return tuple(self._future)

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def current(self) -> T:
        """Return the present value."""
        return self._present

    def push(self, next_value: T) -> None:
        """
        Make `next_value` the present state.

        Outside a transaction the previous present is recorded and the redo
        stack is cleared. Inside a transaction only `present` advances.

        Params:
            next_value: The new present state
        """
        if self._in_transaction:
            self._present = next_value
            return

        self._record(self._present)
        self._present = next_value
        self._future.clear()
        logger.debug("History push: %d past, redo cleared", len(self._past))

    def begin_transaction(self) -> None:
        """Open a transaction. No-op when one is already open."""
        if self._in_transaction:
            return
        self._pending_base = self._present
        self._in_transaction = True
        logger.debug("History transaction opened")

    def commit_transaction(self) -> None:
        """Record the pre-transaction state as one history entry and close."""
        if not self._in_transaction:
            return
        self._record(self._pending_base)
        self._future.clear()
        self._pending_base = None
        self._in_transaction = False
        logger.debug("History transaction committed: %d past", len(self._past))

    def rollback_transaction(self) -> None:
        """Restore the pre-transaction state and discard in-transaction pushes."""
        if not self._in_transaction:
            return
        self._present = self._pending_base
        self._pending_base = None
        self._in_transaction = False
        logger.debug("History transaction rolled back")

    @contextmanager
    def transaction(self) -> Iterator["HistoryStore[T]"]:
        """
        Group pushes made inside the block into a single history entry.

        Commits on normal exit; rolls back and re-raises on any exception.
        Blocks nest: only the outermost block records a history entry, and a
        failing inner block only discards the pushes made inside it.
        """
        outermost = not self._in_transaction
        if outermost:
            self.begin_transaction()
        savepoint = self._present
        try:
            yield self
        except BaseException:
            if outermost:
                self.rollback_transaction()
            else:
                self._present = savepoint
            raise
        if outermost:
            self.commit_transaction()

    def undo(self) -> T | None:
        """
        Step back one entry.

        Returns:
            The new present, or None when there is nothing to undo

        Raises:
            HistoryError: If a transaction is open
        """
        self._ensure_no_transaction("undo")
        if not self._past:
            return None
        self._future.appendleft(self._present)
        self._present = self._past.pop()
        logger.debug("History undo: %d past, %d future", len(self._past), len(self._future))
        return self._present

    def redo(self) -> T | None:
        """
        Step forward one entry.

        Returns:
            The new present, or None when there is nothing to redo

        Raises:
            HistoryError: If a transaction is open
        """
        self._ensure_no_transaction("redo")
        if not self._future:
            return None
        self._past.append(self._present)
        self._present = self._future.popleft()
        logger.debug("History redo: %d past, %d future", len(self._past), len(self._future))
        return self._present

    def _record(self, value: T) -> None:
        self._past.append(value)
        if self._limit is not None:
            while len(self._past) > self._limit:
                self._past.popleft()
                logger.debug("History trimmed to limit %d", self._limit)

    def _ensure_no_transaction(self, action: str) -> None:
        if self._in_transaction:
            raise HistoryError(f"Cannot {action} while a transaction is open")
