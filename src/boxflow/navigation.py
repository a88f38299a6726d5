"""
Keyboard navigation over a Box tree.

Maps an arrow key pressed on the focused box to the box that should take
focus next, creating boxes on demand:

- down: next sibling; past the last sibling a new sibling is created.
- up: previous sibling; no-op on the first one.
- right: first child; a leaf gets a new first child, unless it already
  sits in the last column.
- left: parent; a top-level row moves to the previous row.

Placeholder (``empty``) boxes never take focus. Up and down skip over
them, left climbs past them, and right descends through them.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Union

from .models import Box, Direction, Path
from .paths import get_siblings, resolve, sibling_path, update_node
from .tree import clear_focus, insert_node, new_box, set_focus

logger = logging.getLogger(__name__)


@dataclass
class Navigation:
    """
    Result of a navigation step.

    Attributes:
        children: Top-level rows after the step. The same list object as
            the input when nothing changed.
        focus_path: Path of the box holding focus after the step.
        created: Path of the box created by the step, if any.
    """

    children: List[Box]
    focus_path: Path
    created: Optional[Path] = None


def navigate(
    children: List[Box],
    path: Path,
    direction: Union[Direction, str],
    max_depth: Optional[int] = None,
) -> Navigation:
    """
    Move focus from the box at ``path`` in ``direction``.

    Args:
        children: Top-level rows.
        path: Path of the box the key was pressed on.
        direction: One of up, down, left, right.
        max_depth: Number of columns; right never goes deeper.

    Returns:
        A Navigation. An unresolvable ``path`` yields a no-op.

    Raises:
        ValueError: If ``direction`` is not a known direction.
    """
    direction = Direction(direction)
    path = list(path)

    current = resolve(children, path)
    if current is None:
        logger.debug("navigate: no box at %s", path)
        return Navigation(children, path)

    if direction is Direction.DOWN:
        return _down(children, path)
    if direction is Direction.UP:
        siblings = get_siblings(children, path[:-1])
        target = _next_focusable(siblings, path[-1], -1)
        return _move(children, path, None if target is None else sibling_path(path, target))
    if direction is Direction.RIGHT:
        return _right(children, path, current, max_depth)
    return _move(children, path, _left_target(children, path))


def _down(children: List[Box], path: Path) -> Navigation:
    siblings = get_siblings(children, path[:-1])
    target = _next_focusable(siblings, path[-1], 1)
    if target is not None:
        return _move(children, path, sibling_path(path, target))

    created = sibling_path(path, path[-1] + 1)
    updated = insert_node(clear_focus(children), created, new_box(level=len(path), focus=True))
    return Navigation(updated, created, created)


def _right(
    children: List[Box], path: Path, current: Box, max_depth: Optional[int]
) -> Navigation:
    if max_depth is not None and len(path) >= max_depth:
        return Navigation(children, path)

    if current.children:
        target = path + [0]
        box = current.children[0]
        while box.empty and box.children:
            target.append(0)
            box = box.children[0]
        if box.empty:
            return Navigation(children, path)
        return _move(children, path, target)

    created = path + [0]

    def add_child(box: Box) -> Box:
        return replace(box, children=[new_box(level=box.level + 1, focus=True)])

    updated = update_node(clear_focus(children), path, add_child)
    return Navigation(updated, created, created)


def _left_target(children: List[Box], path: Path) -> Optional[Path]:
    if len(path) > 1:
        target = path[:-1]
        while len(target) > 1 and resolve(children, target).empty:
            target = target[:-1]
        if resolve(children, target).empty:
            return None
        return target

    previous = _next_focusable(children, path[0], -1)
    return None if previous is None else [previous]


def _next_focusable(siblings: List[Box], start: int, step: int) -> Optional[int]:
    position = start + step
    while 0 <= position < len(siblings):
        if not siblings[position].empty:
            return position
        position += step
    return None


def _move(children: List[Box], path: Path, target: Optional[Path]) -> Navigation:
    if target is None or target == path:
        return Navigation(children, path)
    return Navigation(set_focus(children, target), target)
