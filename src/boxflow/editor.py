"""
Flow editing API.

FlowEditor is what the surrounding application talks to. It owns the open
documents and their undo histories, applies each edit to the document's
Box tree and records the matching history command.

Documents are edited in place: every call replaces the document's
``children`` (and ``last_focus``) with a new value and returns the same
document object. Rejected calls (unknown path, refused delete) leave the
document untouched and record nothing.
"""

import itertools
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from .history import CommandKind, History, HistoryRegistry
from .models import Box, Direction, FlowDocument, Path, create_document
from .navigation import navigate
from .paths import resolve
from .styles import new_flow
from .tree import (
    AFTER,
    add_column_head_box,
    clear_focus,
    delete_node,
    first_focusable,
    focus_after_delete,
    insert_sibling,
    new_box,
    set_focus,
    toggle_crossed,
    update_content,
)
from .validate import check_invariants

logger = logging.getLogger(__name__)


class FlowEditor:
    """
    Edits flow documents and keeps their undo history.

    Example:
        >>> editor = FlowEditor()
        >>> doc = editor.create_document(["AC", "NC"])
        >>> doc, focus = editor.navigate(doc, [0], "right")
        >>> doc = editor.apply_edit(doc, focus, {"content": "block"})
        >>> editor.undo(doc).children[0].children[0].content
        ''
    """

    def __init__(self, max_history: Optional[int] = None, strict: bool = False):
        """
        Initialize the editor.

        Args:
            max_history: Undo steps kept per document (default: unlimited)
            strict: Check tree invariants after every change and raise
                InvariantViolation on failure (default: False)
        """
        self.strict = strict
        self.documents: Dict[int, FlowDocument] = {}
        self.histories = HistoryRegistry(max_history=max_history)
        self._ids = itertools.count()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def create_document(
        self,
        columns: List[str],
        invert: bool = False,
        starter_rows: Optional[List[str]] = None,
        title: str = "",
        allow_empty: bool = False,
    ) -> FlowDocument:
        """Create and open a new document."""
        document = create_document(
            columns,
            invert=invert,
            starter_rows=starter_rows,
            doc_id=next(self._ids),
            title=title,
            allow_empty=allow_empty,
        )
        return self.open_document(document)

    def new_flow(
        self,
        style: Union[str, int],
        kind: str = "primary",
        switch_speakers: bool = False,
    ) -> Optional[FlowDocument]:
        """Create and open a flow from a debate-style preset."""
        document = new_flow(style, kind, switch_speakers, doc_id=next(self._ids))
        if document is None:
            return None
        return self.open_document(document)

    def open_document(self, document: FlowDocument) -> FlowDocument:
        """Start editing an existing (e.g. loaded) document."""
        if document.id in self.documents and self.documents[document.id] is not document:
            raise ValueError(f"Another document with id {document.id} is already open")
        self.documents[document.id] = document
        # Generated ids stay clear of the ones already in use.
        self._ids = itertools.count(max(self.documents) + 1)
        return document

    def close_document(self, doc_id: int) -> None:
        """Forget a document and dispose of its history."""
        self.documents.pop(doc_id, None)
        self.histories.discard(doc_id)

    def history(self, document: Union[FlowDocument, int]) -> History:
        """Return the history of a document (or of an open document's id)."""
        if not isinstance(document, FlowDocument):
            document = self.documents[document]
        return self.histories.get(document)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def apply_edit(self, document: FlowDocument, path: Path, updates: Dict[str, Any]) -> FlowDocument:
        """Merge ``updates`` (content, crossed, children, ...) into a box."""
        before = resolve(document.children, path)
        children = update_content(document.children, path, updates, document.max_depth)
        if children is document.children:
            return document

        history = self.history(document)
        self._commit(document, children)
        after = resolve(children, path)
        history.record(CommandKind.EDIT, path, {"before": before, "after": after})
        return document

    def add_sibling(self, document: FlowDocument, path: Path, direction: int = AFTER) -> FlowDocument:
        """Insert a focused blank box before (-1, 0) or after (+1) a box."""
        if resolve(document.children, path) is None:
            logger.debug("add_sibling: no box at %s", path)
            return document

        created = list(path[:-1]) + [path[-1] + (1 if direction > 0 else 0)]
        box = new_box(level=len(path), focus=True)
        children = insert_sibling(clear_focus(document.children), path, direction, box)
        return self._record_add(document, children, path, created, created)

    def delete_box(self, document: FlowDocument, path: Path) -> FlowDocument:
        """Remove a box and its subtree, moving focus to a neighbour."""
        box = resolve(document.children, path)
        children = delete_node(document.children, path, allow_empty=document.allow_empty)
        if children is document.children:
            return document

        focus = focus_after_delete(children, path)
        children = clear_focus(children) if focus is None else set_focus(children, focus)
        history = self.history(document)
        self._commit(document, children, focus or [])
        history.record(CommandKind.DELETE, path, {"box": box})
        history.add_focus(focus)
        return document

    def toggle_cross(self, document: FlowDocument, path: Path) -> FlowDocument:
        """Cross out a box, or restore a crossed-out one."""
        children = toggle_crossed(document.children, path)
        if children is document.children:
            return document

        history = self.history(document)
        self._commit(document, children)
        crossed = resolve(children, path).crossed
        history.record(CommandKind.CROSS, path, {"crossed": crossed})
        return document

    def add_column_box(self, document: FlowDocument, column_index: int) -> FlowDocument:
        """Start a new first row whose first box is in ``column_index``."""
        cleared = clear_focus(document.children)
        children = add_column_head_box(cleared, column_index, document.max_depth)
        if children is cleared:
            return document

        focus = [0] * (column_index + 1)
        origin = self.history(document).last_focus
        return self._record_add(document, children, origin, [0], focus)

    # ------------------------------------------------------------------
    # Focus and navigation
    # ------------------------------------------------------------------

    def navigate(
        self, document: FlowDocument, path: Path, direction: Union[Direction, str]
    ) -> Tuple[FlowDocument, Path]:
        """
        Handle an arrow key pressed on the box at ``path``.

        Returns:
            The document and the path that holds focus afterwards.
        """
        result = navigate(document.children, path, direction, document.max_depth)

        if result.created is not None:
            self._record_add(document, result.children, path, result.created, result.focus_path)
        elif result.children is not document.children:
            history = self.history(document)
            self._commit(document, result.children, result.focus_path)
            history.add_focus(result.focus_path)
        return document, result.focus_path

    def focus(self, document: FlowDocument, path: Path) -> FlowDocument:
        """
        Give focus to a box (e.g. clicked). Never an undo step.

        A placeholder passes focus down to the box it hosts; a chain of
        placeholders with nothing to host leaves focus where it was.
        """
        target = first_focusable(document.children, path)
        if target is None:
            logger.debug("focus: nothing to focus at %s", path)
            return document
        children = set_focus(document.children, target)
        history = self.history(document)
        self._commit(document, children, target)
        history.add_focus(target)
        return document

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self, document: FlowDocument) -> Optional[FlowDocument]:
        """Undo the last change; None when there is nothing to undo."""
        fragment = self.history(document).undo()
        if fragment is None:
            return None
        return self._commit(document, fragment["children"], fragment["last_focus"])

    def redo(self, document: FlowDocument) -> Optional[FlowDocument]:
        """Redo the last undone change; None when there is nothing to redo."""
        fragment = self.history(document).redo()
        if fragment is None:
            return None
        return self._commit(document, fragment["children"], fragment["last_focus"])

    def can_undo(self, document: FlowDocument) -> bool:
        return self.history(document).can_undo()

    def can_redo(self, document: FlowDocument) -> bool:
        return self.history(document).can_redo()

    # ------------------------------------------------------------------

    def _record_add(
        self,
        document: FlowDocument,
        children: List[Box],
        origin: Optional[Path],
        created: Path,
        focus: Path,
    ) -> FlowDocument:
        history = self.history(document)
        self._commit(document, children, focus)
        history.add_focus(origin)
        history.record(CommandKind.ADD, created, {"box": resolve(children, created)})
        history.add_focus(focus)
        return document

    def _commit(
        self, document: FlowDocument, children: List[Box], focus: Optional[Path] = None
    ) -> FlowDocument:
        # Checked before the document changes so a violation leaves it intact
        if self.strict:
            check_invariants(children, max_depth=document.max_depth, single_focus=True)
        document.children = children
        if focus is not None:
            document.last_focus = list(focus)
        return document
