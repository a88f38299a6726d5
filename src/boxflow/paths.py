"""
Path addressing for Box trees.

A path is a list of child indices: ``path[i]`` is the child to descend
into at depth ``i``. The empty path names the document root, i.e. the
top-level ``children`` list itself, never a Box.

Mutations go through :func:`update_siblings` / :func:`update_node`, which
rebuild only the chain of ancestors along the path. Every sibling list and
subtree off that chain is reused as-is, so the cost of a change grows with
the depth of the path, not with the size of the tree.
"""

from dataclasses import replace
from typing import Callable, List, Optional

from .models import Box, Path


def resolve(children: List[Box], path: Path) -> Optional[Box]:
    """
    Follow a path down the tree.

    Args:
        children: Top-level rows of the document.
        path: Child indices from the root.

    Returns:
        The Box at the path, or None if the path is empty or any segment
        is out of range.
    """
    if not path:
        return None

    node: Optional[Box] = None
    siblings = children
    for segment in path:
        if segment < 0 or segment >= len(siblings):
            return None
        node = siblings[segment]
        siblings = node.children
    return node


def get_siblings(children: List[Box], parent: Path) -> Optional[List[Box]]:
    """Return the child list under ``parent`` (the root list for [])."""
    if not parent:
        return children
    node = resolve(children, parent)
    return None if node is None else node.children


def parent_of(path: Path) -> Path:
    return list(path[:-1])


def sibling_path(path: Path, index: int) -> Path:
    """Path of the sibling at ``index`` next to ``path``."""
    return list(path[:-1]) + [index]


def reindex(siblings: List[Box], start: int = 0) -> List[Box]:
    """
    Rewrite ``index`` fields so that ``siblings[i].index == i``.

    Boxes before ``start`` and boxes already carrying the right index are
    reused. Always returns a new list.
    """
    result = list(siblings)
    for i in range(start, len(result)):
        if result[i].index != i:
            result[i] = replace(result[i], index=i)
    return result


def update_siblings(
    children: List[Box],
    parent: Path,
    transform: Callable[[List[Box]], List[Box]],
) -> List[Box]:
    """
    Replace the sibling list under ``parent`` and rebuild its ancestors.

    Args:
        children: Top-level rows of the document.
        parent: Path of the box whose children are transformed ([] for
            the root list).
        transform: Receives the current sibling list and returns the new
            one. It must not modify its argument.

    Returns:
        New top-level list. Only boxes on the ancestor chain are new.

    Raises:
        IndexError: If ``parent`` does not resolve. Callers check the path
            with :func:`resolve` first.
    """
    if not parent:
        return transform(children)

    head = parent[0]
    if head < 0 or head >= len(children):
        raise IndexError(f"path segment {head} out of range")

    node = children[head]
    rebuilt = replace(
        node, children=update_siblings(node.children, parent[1:], transform)
    )
    result = list(children)
    result[head] = rebuilt
    return result


def update_node(
    children: List[Box], path: Path, transform: Callable[[Box], Box]
) -> List[Box]:
    """Replace the box at ``path`` with ``transform(box)``."""
    if not path:
        raise IndexError("the empty path does not name a box")
    position = path[-1]

    def swap(siblings: List[Box]) -> List[Box]:
        if position < 0 or position >= len(siblings):
            raise IndexError(f"path segment {position} out of range")
        result = list(siblings)
        result[position] = transform(siblings[position])
        return result

    return update_siblings(children, path[:-1], swap)
