"""
Spreadsheet projection of a flow.

In the spreadsheet view each top-level row becomes one grid row and each
column shows one level of the row's first-child chain:

    row 0:  [row content, first child, first grandchild, ...]

Cells without a box come out as "". Going back, a row of values becomes
a chain of boxes; blank cells become placeholder (``empty``) boxes.

The column view lists, for one column, every box displayed in it, in
display order.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from .models import Box, FlowDocument, Path
from .paths import reindex


def flatten_box_chain(box: Optional[Box], depth: int) -> List[str]:
    """Contents along the first-child chain of ``box``, padded to ``depth``."""
    values: List[str] = []
    current = box
    for _ in range(depth):
        values.append(current.content if current is not None else "")
        current = current.children[0] if current is not None and current.children else None
    return values


def build_box_chain(values: List[str], existing: Optional[Box] = None, level: int = 1) -> Box:
    """
    Build (or update) a first-child chain from a row of values.

    Args:
        values: Cell contents from the column at ``level - 1`` onwards.
        existing: Chain to update; its other children are kept.
        level: Level of the first box of the chain.

    Returns:
        The chain's head box. Blank cells become placeholders.
    """
    content = values[0] if values else ""
    base = existing if existing is not None else Box(level=level)
    empty = not content.strip()
    head = replace(base, content=content, empty=empty, focus=base.focus and not empty, level=level)

    # Trailing blank cells only create boxes where a chain already exists
    if len(values) > 1 and (head.children or any(v.strip() for v in values[1:])):
        first = head.children[0] if head.children else None
        child = build_box_chain(values[1:], first, level + 1)
        head = replace(head, children=reindex([child] + list(head.children[1:])))
    return head


def to_rows(document: FlowDocument) -> List[List[str]]:
    """One list of cell values per top-level row."""
    depth = len(document.columns)
    return [flatten_box_chain(box, depth) for box in document.children]


def from_rows(rows: List[List[str]], columns: List[str]) -> List[Box]:
    """
    Build top-level rows from grid values.

    Rows are padded or cut to the number of columns.
    """
    depth = len(columns)
    boxes = []
    for values in rows:
        padded = (list(values) + [""] * depth)[:depth]
        boxes.append(build_box_chain(padded))
    return reindex(boxes)


def column_boxes(children: List[Box], column: int) -> List[Tuple[Path, Box]]:
    """
    Boxes displayed in ``column`` (level ``column + 1``), in display order.

    Placeholders are included so callers can keep their space.
    """
    result: List[Tuple[Path, Box]] = []

    def walk(boxes: List[Box], parent: Path, depth: int) -> None:
        for position, box in enumerate(boxes):
            path = parent + [position]
            if depth == column:
                result.append((path, box))
            elif depth < column:
                walk(box.children, path, depth + 1)

    walk(children, [], 0)
    return result
