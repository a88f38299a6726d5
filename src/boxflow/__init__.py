"""
BoxFlow - Debate flows as editable box trees

A Python library for taking notes on a debate round: nested boxes of
text arranged in one column per speech, keyboard navigation that creates
boxes on demand, and per-flow undo/redo.

Example:
    >>> from boxflow import FlowEditor, FlowRenderer
    >>> editor = FlowEditor()
    >>> doc = editor.create_document(["AC", "NC"])
    >>> doc = editor.apply_edit(doc, [0], {"content": "Contention 1"})
    >>> doc, focus = editor.navigate(doc, [0], "right")
    >>> doc = editor.apply_edit(doc, focus, {"content": "Non-unique"})
    >>> print(FlowRenderer().render(doc))

Undo Example:
    >>> doc = editor.undo(doc)
    >>> editor.can_redo(doc)
    True
"""

from .editor import FlowEditor
from .export import FlowExporter
from .grid import build_box_chain, column_boxes, flatten_box_chain, from_rows, to_rows
from .history import Command, CommandKind, History, HistoryRegistry
from .models import Box, Direction, FlowDocument, Path, create_document
from .navigation import Navigation, navigate
from .paths import reindex, resolve
from .renderer import BoxRenderer, Canvas, FlowRenderer, render_flow
from .serialization import (
    FlowFormatError,
    box_from_dict,
    box_to_dict,
    dumps,
    flow_from_dict,
    flow_to_dict,
    load_flows,
    loads,
    save_flows,
)
from .styles import DEBATE_STYLES, STYLE_ORDER, DebateStyle, FlowStyle, get_style, new_flow
from .tree import (
    AFTER,
    BEFORE,
    add_column_head_box,
    delete_node,
    find_focus,
    insert_sibling,
    iter_boxes,
    toggle_crossed,
    update_content,
)
from .validate import InvariantViolation, check_invariants, tree_depth, tree_graph

__version__ = "0.4.0"

__all__ = [
    # Main API
    "FlowEditor",
    "create_document",
    # Models
    "Box",
    "FlowDocument",
    "Direction",
    "Path",
    # Paths and tree operations
    "resolve",
    "reindex",
    "iter_boxes",
    "insert_sibling",
    "delete_node",
    "update_content",
    "toggle_crossed",
    "add_column_head_box",
    "find_focus",
    "BEFORE",
    "AFTER",
    # Navigation
    "navigate",
    "Navigation",
    # History
    "History",
    "HistoryRegistry",
    "Command",
    "CommandKind",
    # Styles
    "DEBATE_STYLES",
    "STYLE_ORDER",
    "DebateStyle",
    "FlowStyle",
    "get_style",
    "new_flow",
    # Grid
    "flatten_box_chain",
    "build_box_chain",
    "to_rows",
    "from_rows",
    "column_boxes",
    # Serialization
    "FlowFormatError",
    "box_to_dict",
    "box_from_dict",
    "flow_to_dict",
    "flow_from_dict",
    "dumps",
    "loads",
    "save_flows",
    "load_flows",
    # Rendering and export
    "Canvas",
    "BoxRenderer",
    "FlowRenderer",
    "render_flow",
    "FlowExporter",
    # Validation
    "InvariantViolation",
    "check_invariants",
    "tree_graph",
    "tree_depth",
]
