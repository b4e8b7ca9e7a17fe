"""
Shared test fixtures and utilities for the foldtree test suite.
"""

import pytest

from foldtree import CounterIds, Document, DocumentConfig


@pytest.fixture
def document():
    """Fresh document with the stock catalogue and readable ids (n1, n2, ...).

    The root is always "n1".
    """
    return Document(DocumentConfig(id_factory=CounterIds()))


@pytest.fixture
def list_document(document):
    """Document holding root -> list -> list-item -> text("hi").

    Returns the document plus a dict of the created ids under the keys
    "root", "list", "item" and "text".
    """
    root = document.root_id
    list_id = document.add("list").into(root)
    item_id = document.add("list-item").into(list_id)
    text_id = document.add("text", {"text": "hi"}).into(item_id)
    return document, {"root": root, "list": list_id, "item": item_id, "text": text_id}
