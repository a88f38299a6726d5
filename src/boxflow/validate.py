"""
Invariant checks for Box trees.

Uses networkx for:
- Graph representation of the forest (one node per box, keyed by path)
- Shape checks (every box has at most one parent, no cycles)
- Depth (longest root-to-leaf path)

A failed check means a bug in the code that produced the tree, never a
user error, so violations are raised as assertion errors.
"""

from typing import List, Optional

import networkx as nx

from .models import Box


class InvariantViolation(AssertionError):
    """Raised when a tree breaks an index, level, depth or focus invariant."""

    pass


def tree_graph(children: List[Box]) -> nx.DiGraph:
    """
    Build a directed graph of the forest.

    Nodes are path tuples with the box stored under the ``box`` attribute;
    edges point from parent to child.

    Raises:
        InvariantViolation: If the same Box object is reachable twice.
    """
    graph = nx.DiGraph()
    seen = set()
    stack = [((position,), box) for position, box in enumerate(children)]

    while stack:
        path, box = stack.pop()
        if id(box) in seen:
            raise InvariantViolation(f"Box at {list(path)} is reachable more than once")
        seen.add(id(box))

        graph.add_node(path, box=box)
        if len(path) > 1:
            graph.add_edge(path[:-1], path)
        stack.extend((path + (position,), child) for position, child in enumerate(box.children))

    return graph


def tree_depth(children: List[Box]) -> int:
    """Number of levels in the deepest branch (0 for an empty document)."""
    if not children:
        return 0
    return nx.dag_longest_path_length(tree_graph(children)) + 1


def check_invariants(
    children: List[Box],
    max_depth: Optional[int] = None,
    single_focus: bool = False,
) -> None:
    """
    Verify the structural invariants of a tree.

    Checks that every sibling list is indexed 0..n-1, that each child sits
    one level below its parent (top-level rows at level 1), that the tree
    is no deeper than ``max_depth`` and, optionally, that at most one
    non-placeholder box has focus.

    Raises:
        InvariantViolation: On the first broken invariant.
    """
    graph = tree_graph(children)
    if graph.number_of_nodes() and not nx.is_branching(graph):
        raise InvariantViolation("Tree is not a forest")

    _check_siblings(children, [], 1)

    for path in graph.nodes:
        box = graph.nodes[path]["box"]
        if box.empty and box.focus:
            raise InvariantViolation(f"Placeholder box at {list(path)} holds focus")

    if max_depth is not None and graph.number_of_nodes():
        depth = nx.dag_longest_path_length(graph) + 1
        if depth > max_depth:
            raise InvariantViolation(f"Tree depth {depth} exceeds {max_depth} columns")

    if single_focus:
        focused = [list(path) for path in graph.nodes if graph.nodes[path]["box"].focus]
        if len(focused) > 1:
            raise InvariantViolation(f"Several boxes hold focus: {sorted(focused)}")


def _check_siblings(siblings: List[Box], parent: List[int], level: int) -> None:
    for position, box in enumerate(siblings):
        path = parent + [position]
        if box.index != position:
            raise InvariantViolation(f"Box at {path} has index {box.index}")
        if box.level != level:
            raise InvariantViolation(f"Box at {path} has level {box.level}, expected {level}")
        _check_siblings(box.children, path, level + 1)
