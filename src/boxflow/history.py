"""
Undo/redo history for flow documents.

Each FlowDocument gets its own History. After every successful mutation
the caller records a Command carrying what is needed to invert it:

    ======  ==========================  ==================================
    kind    path                        payload
    ======  ==========================  ==================================
    edit    the edited box              ``before`` / ``after`` box values
    add     where the box was inserted  ``box``: the inserted box
    delete  where the box was removed   ``box``: the removed subtree
    cross   the toggled box             ``crossed``: the new flag value
    ======  ==========================  ==================================

History is linear: recording a command drops everything that was undone.
Focus moves are tracked (``last_focus``) so undo can put the cursor back,
but they never become undo steps of their own.

Histories live in a HistoryRegistry owned by whatever holds the open
documents. They are created on first access and must be discarded when
their document is deleted.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .models import FlowDocument, Path
from .paths import update_node
from .tree import (
    clear_focus,
    first_focusable,
    focus_after_delete,
    insert_node,
    remove_node,
    replace_node,
    set_focus,
)

logger = logging.getLogger(__name__)


class CommandKind(str, Enum):
    """Kinds of recorded commands."""

    EDIT = "edit"
    ADD = "add"
    DELETE = "delete"
    CROSS = "cross"


@dataclass
class Command:
    """
    A recorded, reversible change.

    Attributes:
        kind: What kind of change this was.
        path: Box the change applies to (see module docstring).
        payload: Data needed to undo and redo the change.
        focus_before: Focus path at the time the change was recorded.
    """

    kind: CommandKind
    path: Path
    payload: Dict[str, Any] = field(default_factory=dict)
    focus_before: Optional[Path] = None


class History:
    """
    Linear undo/redo stacks for one document.

    Args:
        document: The document whose ``children`` the commands apply to.
        max_history: Number of undo steps kept; None keeps everything.
    """

    def __init__(self, document: FlowDocument, max_history: Optional[int] = None):
        if max_history is not None and max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.document = document
        self.max_history = max_history
        self.past: List[Command] = []
        self.future: List[Command] = []
        self.last_focus: Optional[Path] = list(document.last_focus) or None

    def record(
        self,
        kind: Union[CommandKind, str],
        path: Path,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Command:
        """
        Record a change that has just been applied.

        Clears the redo stack.

        Raises:
            ValueError: If ``kind`` is unknown.
        """
        command = Command(
            kind=CommandKind(kind),
            path=list(path),
            payload=dict(payload or {}),
            focus_before=None if self.last_focus is None else list(self.last_focus),
        )
        self.past.append(command)
        self.future.clear()
        if self.max_history is not None and len(self.past) > self.max_history:
            self.past.pop(0)
        logger.debug("flow %s: recorded %s at %s", self.document.id, command.kind.value, path)
        return command

    def add_focus(self, path: Optional[Path]) -> None:
        """Note a focus move. Never creates an undo step."""
        self.last_focus = None if path is None else list(path)

    def can_undo(self) -> bool:
        return bool(self.past)

    def can_redo(self) -> bool:
        return bool(self.future)

    def undo(self) -> Optional[Dict[str, Any]]:
        """
        Revert the most recent command.

        Returns:
            Fields to merge into the document (``children`` and
            ``last_focus``), or None if there is nothing to undo.
        """
        if not self.past:
            return None

        command = self.past.pop()
        children = self._revert(command, self.document.children)
        self.future.append(command)

        if command.kind is CommandKind.ADD:
            focus = command.focus_before
        else:
            focus = command.path
        logger.debug("flow %s: undid %s at %s", self.document.id, command.kind.value, command.path)
        return self._fragment(children, focus)

    def redo(self) -> Optional[Dict[str, Any]]:
        """
        Re-apply the most recently undone command.

        Returns:
            Fields to merge into the document, or None if there is nothing
            to redo.
        """
        if not self.future:
            return None

        command = self.future.pop()
        children = self._apply(command, self.document.children)
        self.past.append(command)

        if command.kind is CommandKind.DELETE:
            focus = focus_after_delete(children, command.path)
        else:
            focus = command.path
        logger.debug("flow %s: redid %s at %s", self.document.id, command.kind.value, command.path)
        return self._fragment(children, focus)

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()

    def _fragment(self, children, focus: Optional[Path]) -> Dict[str, Any]:
        # Placeholders never take focus; land on the box they host
        if focus is not None:
            focus = first_focusable(children, focus)
        if focus is not None:
            children = set_focus(children, focus)
        else:
            children = clear_focus(children)
        self.last_focus = focus
        return {"children": children, "last_focus": list(focus or [])}

    @staticmethod
    def _revert(command: Command, children):
        payload = command.payload
        if command.kind is CommandKind.EDIT:
            return replace_node(children, command.path, payload["before"])
        if command.kind is CommandKind.ADD:
            return remove_node(children, command.path)
        if command.kind is CommandKind.DELETE:
            return insert_node(children, command.path, payload["box"])
        return update_node(
            children, command.path, lambda box: replace(box, crossed=not payload["crossed"])
        )

    @staticmethod
    def _apply(command: Command, children):
        payload = command.payload
        if command.kind is CommandKind.EDIT:
            return replace_node(children, command.path, payload["after"])
        if command.kind is CommandKind.ADD:
            return insert_node(children, command.path, payload["box"])
        if command.kind is CommandKind.DELETE:
            return remove_node(children, command.path)
        return update_node(
            children, command.path, lambda box: replace(box, crossed=payload["crossed"])
        )


class HistoryRegistry:
    """
    Histories of the open documents, keyed by document id.

    Args:
        max_history: Passed to every History the registry creates.
    """

    def __init__(self, max_history: Optional[int] = None):
        self.max_history = max_history
        self._histories: Dict[int, History] = {}

    def get(self, document: FlowDocument) -> History:
        """Return the document's History, creating it on first access."""
        history = self._histories.get(document.id)
        if history is None:
            history = History(document, max_history=self.max_history)
            self._histories[document.id] = history
        elif history.document is not document:
            history.document = document
        return history

    def discard(self, doc_id: int) -> None:
        """Drop the history of a deleted document."""
        self._histories.pop(doc_id, None)

    def clear(self) -> None:
        self._histories.clear()

    def __contains__(self, doc_id: int) -> bool:
        return doc_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)
