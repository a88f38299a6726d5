"""
Data models for flow documents.

This module contains the dataclasses that make up a flow: the recursive
Box tree and the FlowDocument that owns it. Boxes are treated as values
by every operation in the package; a change produces a new Box with
``dataclasses.replace`` and untouched subtrees are shared between the old
and the new tree.

Classes:
    Box: A single node (one argument / line of notes) in the tree.
    FlowDocument: One flow: its columns, display flags and Box forest.
    Direction: Keyboard navigation directions.

Functions:
    create_document: Build a new flow with its starting rows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# A path is a list of child indices from the document root.
Path = List[int]


class Direction(str, Enum):
    """Direction of a navigation keystroke."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Box:
    """
    A node in a flow's tree.

    Attributes:
        content: Text of the box, possibly empty.
        children: Ordered child boxes (display order); empty for a leaf.
        index: Position among siblings; always equal to the list position.
        level: Depth from the document root, 1-based. Level N is shown in
            column N - 1.
        focus: Whether this box holds the input focus.
        empty: Placeholder that only hosts descendants in later columns. It
            shows no text and never takes focus.
        crossed: Strike-through flag (argument answered or dropped).
        placeholder: Hint text shown while the box is blank.
    """

    content: str = ""
    children: List["Box"] = field(default_factory=list)
    index: int = 0
    level: int = 1
    focus: bool = False
    empty: bool = False
    crossed: bool = False
    placeholder: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class FlowDocument:
    """
    One flow: a forest of boxes arranged in named columns.

    The document object keeps its identity for its whole life. Each
    operation replaces ``children`` (and ``last_focus``) with a new value
    instead of editing the old tree.

    Attributes:
        id: Identity used to key the document's history.
        title: Display name of the flow.
        columns: Column names; their count is the maximum tree depth.
        invert: Alternates color banding when rendered.
        children: Top-level rows.
        archived: Hidden from the active tab list.
        last_focus: Path of the box that last held focus.
        allow_empty: Whether the last top-level row may be deleted.
        metadata: Opaque per-flow data (round id, speech docs, ...).
    """

    id: int
    title: str = ""
    columns: List[str] = field(default_factory=list)
    invert: bool = False
    children: List[Box] = field(default_factory=list)
    archived: bool = False
    last_focus: Path = field(default_factory=list)
    allow_empty: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def max_depth(self) -> int:
        """Deepest level a box may have in this flow."""
        return len(self.columns)

    def update(self, fragment: Dict[str, Any]) -> "FlowDocument":
        """Merge a fragment (e.g. from undo/redo) into the document."""
        for key, value in fragment.items():
            if not hasattr(self, key):
                raise AttributeError(f"FlowDocument has no field '{key}'")
            setattr(self, key, value)
        return self


def create_document(
    columns: List[str],
    invert: bool = False,
    starter_rows: Optional[List[str]] = None,
    doc_id: int = 0,
    title: str = "",
    allow_empty: bool = False,
) -> FlowDocument:
    """
    Create a flow document.

    Args:
        columns: Column names; at least one.
        invert: Alternate color banding.
        starter_rows: Contents of pre-filled top-level rows. Without them
            the document starts with a single blank row, unless
            ``allow_empty`` is set.
        doc_id: Identity of the document.
        title: Display name.
        allow_empty: Whether the document may have no top-level rows.

    Raises:
        ValueError: If ``columns`` is empty.
    """
    if not columns:
        raise ValueError("A flow needs at least one column")

    rows = list(starter_rows or [])
    if not rows and not allow_empty:
        rows = [""]

    return FlowDocument(
        id=doc_id,
        title=title,
        columns=list(columns),
        invert=invert,
        children=[Box(content=text, index=i, level=1) for i, text in enumerate(rows)],
        allow_empty=allow_empty,
    )
