"""Pytest configuration and shared fixtures for BoxFlow tests."""

import pytest

from boxflow import Box, FlowDocument, FlowEditor

# (content, children) pairs; None marks a placeholder box.
SAMPLE_ROWS = [
    ("Contention 1", [("Non-unique", [("Extend", [])]), ("Turn", [])]),
    ("Contention 2", []),
    (None, [("Off-case", [])]),
]


def build_tree(rows, level=1):
    """Build a correctly indexed and leveled Box forest from nested pairs."""
    return [
        Box(
            content=content or "",
            children=build_tree(children, level + 1),
            index=position,
            level=level,
            empty=content is None,
        )
        for position, (content, children) in enumerate(rows)
    ]


@pytest.fixture
def sample_tree():
    """Three-column forest with nested boxes and a placeholder row.

    [0] Contention 1        [0,0] Non-unique      [0,0,0] Extend
                            [0,1] Turn
    [1] Contention 2
    [2] (placeholder)       [2,0] Off-case
    """
    return build_tree(SAMPLE_ROWS)


@pytest.fixture
def sample_doc(sample_tree):
    """Flow document holding the sample tree."""
    return FlowDocument(
        id=7,
        title="Aff",
        columns=["1AC", "1NC", "2AC"],
        children=sample_tree,
        metadata={"roundId": 3},
    )


@pytest.fixture
def editor():
    """FlowEditor that checks tree invariants after every change."""
    return FlowEditor(strict=True)


@pytest.fixture
def two_column_doc(editor):
    """Fresh two-column flow with one blank row."""
    return editor.create_document(["AC", "NC"])


@pytest.fixture
def open_sample_doc(editor, sample_doc):
    """The sample document, opened in the editor."""
    return editor.open_document(sample_doc)


@pytest.fixture
def make_tree():
    """Builder for custom forests: make_tree([("A", [("B", [])])])."""
    return build_tree
