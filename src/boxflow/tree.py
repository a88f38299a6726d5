"""
Structural operations on Box trees.

Every operation takes the document's top-level ``children`` list and
returns a new one; the caller's list and boxes are never modified. When
an operation is rejected (out-of-range path, refused delete, column past
the last one) the input list itself is returned, so callers can detect a
no-op with ``result is children``.

All index-changing operations leave every touched sibling list with
contiguous, zero-based ``index`` fields.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .models import Box, Path
from .paths import get_siblings, reindex, resolve, update_node, update_siblings
from .validate import tree_depth

logger = logging.getLogger(__name__)

# Fields a caller may merge into a box with update_content().
EDITABLE_FIELDS = {"content", "children", "empty", "crossed", "placeholder"}

# Direction values accepted by insert_sibling(). 0 inserts above, like -1.
BEFORE = -1
AFTER = 1


def new_box(index: int = 0, level: int = 1, focus: bool = False, content: str = "") -> Box:
    """Create a blank box."""
    return Box(content=content, children=[], index=index, level=level, focus=focus)


def relevel(box: Box, level: int) -> Box:
    """Return ``box`` with ``level`` set and its descendants' levels following."""
    if box.level == level and all(child.level == level + 1 for child in box.children):
        return box
    return replace(
        box,
        level=level,
        children=[relevel(child, level + 1) for child in box.children],
    )


def iter_boxes(children: List[Box], parent: Optional[Path] = None) -> Iterator[Tuple[Path, Box]]:
    """Walk the tree depth-first in display order, yielding (path, box)."""
    parent = parent or []
    for position, box in enumerate(children):
        path = parent + [position]
        yield path, box
        yield from iter_boxes(box.children, path)


# ---------------------------------------------------------------------------
# Guarded operations
# ---------------------------------------------------------------------------


def insert_sibling(children: List[Box], path: Path, direction: int, box: Box) -> List[Box]:
    """
    Insert ``box`` next to the box at ``path``.

    Args:
        children: Top-level rows.
        path: Path of the existing box.
        direction: -1 (or 0) to insert before it, +1 to insert after it.
        box: Box to insert; its index and level are rewritten to fit.

    Returns:
        New top-level rows, or ``children`` if ``path`` does not resolve.
    """
    if resolve(children, path) is None:
        logger.debug("insert_sibling: no box at %s", path)
        return children

    position = path[-1] + (1 if direction > 0 else 0)
    return insert_node(children, path[:-1] + [position], box)


def delete_node(children: List[Box], path: Path, allow_empty: bool = False) -> List[Box]:
    """
    Remove the box at ``path`` together with its subtree.

    The empty path is never deleted. Removing the only top-level row is
    refused unless ``allow_empty`` is set. Nested boxes may always be
    removed, even the last child of a parent.

    Returns:
        New top-level rows, or ``children`` if the delete was rejected.
    """
    if resolve(children, path) is None:
        logger.debug("delete_node: no box at %s", path)
        return children
    if len(path) == 1 and len(children) == 1 and not allow_empty:
        logger.debug("delete_node: refusing to remove the last row")
        return children

    return remove_node(children, path)


def update_content(
    children: List[Box], path: Path, updates: Dict[str, Any], max_depth: Optional[int] = None
) -> List[Box]:
    """
    Merge ``updates`` into the box at ``path``.

    Allowed keys are those in ``EDITABLE_FIELDS``; focus moves go through
    :func:`set_focus`. Replacement ``children`` are re-indexed and re-leveled
    under the box, and are refused when they would reach past ``max_depth``.

    Raises:
        ValueError: If ``updates`` names a field that cannot be set.
    """
    unknown = set(updates) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update box fields: {', '.join(sorted(unknown))}")

    target = resolve(children, path)
    if target is None:
        logger.debug("update_content: no box at %s", path)
        return children

    changes = dict(updates)
    if changes.get("empty"):
        changes["focus"] = False
    if "children" in changes:
        if max_depth is not None and target.level + tree_depth(changes["children"]) > max_depth:
            logger.debug("update_content: children under %s reach past column %d", path, max_depth)
            return children
        changes["children"] = [
            relevel(child, target.level + 1) for child in reindex(changes["children"])
        ]
    return update_node(children, path, lambda box: replace(box, **changes))


def toggle_crossed(children: List[Box], path: Path) -> List[Box]:
    """Flip the ``crossed`` flag of the box at ``path``."""
    if resolve(children, path) is None:
        logger.debug("toggle_crossed: no box at %s", path)
        return children
    return update_node(children, path, lambda box: replace(box, crossed=not box.crossed))


def add_column_head_box(
    children: List[Box], column_index: int, max_depth: Optional[int] = None
) -> List[Box]:
    """
    Start a new top-level row whose first box sits in ``column_index``.

    The row is a chain: ``column_index`` placeholder boxes followed by a
    focused blank box at level ``column_index + 1``. The chain is inserted
    as the first row; its focused box is at ``[0] * (column_index + 1)``.

    Raises:
        ValueError: If ``column_index`` is negative.
    """
    if column_index < 0:
        raise ValueError("column_index must be non-negative")
    if max_depth is not None and column_index >= max_depth:
        logger.debug("add_column_head_box: column %d past the last column", column_index)
        return children

    head = new_box(level=column_index + 1, focus=True)
    for level in range(column_index, 0, -1):
        head = Box(children=[head], level=level, empty=True)

    return insert_node(children, [0], head)


# ---------------------------------------------------------------------------
# Unguarded primitives (history replay)
# ---------------------------------------------------------------------------


def insert_node(children: List[Box], path: Path, box: Box) -> List[Box]:
    """
    Insert ``box`` so that it ends up at ``path``.

    Raises:
        IndexError: If the parent does not exist or the position is past
            the end of the sibling list.
    """
    position = path[-1]
    level = len(path)

    def splice(siblings: List[Box]) -> List[Box]:
        if position < 0 or position > len(siblings):
            raise IndexError(f"cannot insert at position {position}")
        result = list(siblings)
        result.insert(position, relevel(replace(box, index=position), level))
        return reindex(result, position)

    return update_siblings(children, path[:-1], splice)


def remove_node(children: List[Box], path: Path) -> List[Box]:
    """
    Remove the box at ``path``.

    Raises:
        IndexError: If ``path`` does not resolve.
    """
    position = path[-1]

    def splice(siblings: List[Box]) -> List[Box]:
        if position < 0 or position >= len(siblings):
            raise IndexError(f"cannot remove position {position}")
        result = list(siblings)
        del result[position]
        return reindex(result, position)

    return update_siblings(children, path[:-1], splice)


def replace_node(children: List[Box], path: Path, box: Box) -> List[Box]:
    """Put ``box`` at ``path``, keeping the slot's index and level."""
    return update_node(
        children,
        path,
        lambda old: relevel(replace(box, index=old.index), old.level),
    )


# ---------------------------------------------------------------------------
# Focus
# ---------------------------------------------------------------------------


def clear_focus(children: List[Box]) -> List[Box]:
    """
    Clear every ``focus`` flag.

    Subtrees holding no focus are reused; if nothing had focus the input
    list is returned.
    """
    changed = False
    result = []
    for box in children:
        cleared = _clear_box_focus(box)
        changed = changed or cleared is not box
        result.append(cleared)
    return result if changed else children


def _clear_box_focus(box: Box) -> Box:
    kids = clear_focus(box.children)
    if not box.focus and kids is box.children:
        return box
    return replace(box, focus=False, children=kids)


def set_focus(children: List[Box], path: Path) -> List[Box]:
    """Move focus to the box at ``path``; no-op if it does not resolve."""
    if resolve(children, path) is None:
        logger.debug("set_focus: no box at %s", path)
        return children
    cleared = clear_focus(children)
    return update_node(cleared, path, lambda box: replace(box, focus=True))


def find_focus(children: List[Box]) -> Optional[Path]:
    """Path of the first focused box in display order, if any."""
    for path, box in iter_boxes(children):
        if box.focus:
            return path
    return None


def strip_focus(box: Box) -> Box:
    """Copy of ``box`` with focus cleared throughout (for comparisons)."""
    return replace(box, focus=False, children=[strip_focus(c) for c in box.children])


def first_focusable(children: List[Box], path: Path) -> Optional[Path]:
    """
    Descend from ``path`` through placeholders to the box that takes focus.

    Follows first children while the box is an ``empty`` placeholder.
    """
    box = resolve(children, path)
    if box is None:
        return None
    path = list(path)
    while box.empty and box.children:
        path.append(0)
        box = box.children[0]
    return None if box.empty else path


def focus_after_delete(children: List[Box], path: Path) -> Optional[Path]:
    """
    Where focus goes once the box at ``path`` has been removed.

    The previous sibling, else the box that moved into the freed slot,
    else the nearest non-placeholder ancestor.
    """
    siblings = get_siblings(children, path[:-1]) or []
    position = path[-1]
    if position > 0 and position - 1 < len(siblings):
        candidate = first_focusable(children, path[:-1] + [position - 1])
        if candidate is not None:
            return candidate
    if position < len(siblings):
        candidate = first_focusable(children, path)
        if candidate is not None:
            return candidate
    parent = path[:-1]
    while parent:
        if not resolve(children, parent).empty:
            return parent
        parent = parent[:-1]
    return None
