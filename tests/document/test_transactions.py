"""
Tests for Document transactions.

Focus Areas:
1. Several edits collapse into one undo step
2. Failure inside the transaction restores the exact prior state
3. Nested transactions and history navigation inside a transaction
"""

import pytest

from foldtree.exceptions import ContainmentViolationError, HistoryError


class TestRunTransaction:
    """Test run_transaction commit and rollback."""

    def test_commit_is_single_undo_step(self, document):
        root = document.root_id
        before = document.snapshot

        def build():
            list_id = document.add("list").into(root)
            item_id = document.add("list-item").into(list_id)
            document.add("text", {"text": "a"}).into(item_id)
            return list_id

        list_id = document.run_transaction(build)

        assert len(document.descendants(list_id)) == 2
        assert len(document.history.past) == 1
        assert document.undo() is True
        assert document.snapshot == before
        assert document.redo() is True
        assert document.get_node(list_id) is not None

    def test_failure_rolls_back_everything(self, list_document):
        document, ids = list_document
        document.add("image").into(ids["root"])
        document.undo()
        snapshot_before = document.snapshot
        past_before = document.history.past
        future_before = document.history.future

        def broken():
            document.update_field(ids["text"], "text", "changed")
            document.add("list-item").into(ids["list"])
            document.remove(ids["item"])
            document.add("text").into(ids["list"])

        with pytest.raises(ContainmentViolationError):
            document.run_transaction(broken)

        assert document.snapshot == snapshot_before
        assert document.history.past == past_before
        assert document.history.future == future_before
        assert not document.history.in_transaction

    def test_arbitrary_exception_rolls_back(self, document):
        before = document.snapshot

        def broken():
            document.add("image").into(document.root_id)
            raise KeyError("caller failure")

        with pytest.raises(KeyError):
            document.run_transaction(broken)
        assert document.snapshot is before

    def test_intermediate_state_visible_inside(self, document):
        seen = []

        def body():
            node_id = document.add("image").into(document.root_id)
            seen.append(document.get_node(node_id) is not None)

        document.run_transaction(body)
        assert seen == [True]


class TestTransactionContext:
    """Test the context-manager form and nesting."""

    def test_context_manager(self, document):
        with document.transaction():
            document.add("image").into(document.root_id)
            document.add("image").into(document.root_id)
        assert len(document.history.past) == 1

    def test_nested_success_is_one_step(self, document):
        root = document.root_id
        with document.transaction():
            document.add("image").into(root)
            with document.transaction():
                document.add("image").into(root)
            document.add("image").into(root)
        assert len(document.get_node(root).child_ids) == 3
        assert len(document.history.past) == 1

    def test_inner_failure_only_discards_inner_edits(self, document):
        root = document.root_id
        with document.transaction():
            kept = document.add("image").into(root)
            with pytest.raises(RuntimeError):
                with document.transaction():
                    document.add("image").into(root)
                    raise RuntimeError("inner")
            assert document.get_node(root).child_ids == (kept,)
        assert document.get_node(root).child_ids == (kept,)
        assert len(document.history.past) == 1

    def test_outer_failure_discards_committed_inner(self, document):
        before = document.snapshot
        with pytest.raises(ValueError):
            with document.transaction():
                with document.transaction():
                    document.add("image").into(document.root_id)
                raise ValueError("outer")
        assert document.snapshot is before
        assert document.history.past == ()

    def test_undo_inside_transaction_rejected(self, document):
        document.add("image").into(document.root_id)
        with pytest.raises(HistoryError):
            with document.transaction():
                document.undo()
        assert document.can_undo
