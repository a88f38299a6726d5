"""
JSON serialization of flow documents.

Documents are stored as plain nested records using the same field names
as the models (``content``, ``children``, ``index``, ``level``, ``focus``,
``empty``, ``crossed``). A flow record keeps its title under ``content``
and its focus path under ``lastFocus``; any other keys found in a record
(round id, speech documents, ...) are carried through ``metadata``.

``focus`` is input state, not document state: it is written as stored but
always loaded as False.
"""

import json
from pathlib import Path as FilePath
from typing import Any, Dict, List, Union

from .models import Box, FlowDocument

# Flow record keys that map onto FlowDocument fields.
FLOW_KEYS = {"id", "content", "columns", "invert", "children", "archived", "lastFocus", "allowEmpty"}


class FlowFormatError(ValueError):
    """Raised when stored data is not a valid flow or list of flows."""

    pass


def box_to_dict(box: Box) -> Dict[str, Any]:
    """Convert a box and its subtree to a plain record."""
    record: Dict[str, Any] = {
        "content": box.content,
        "children": [box_to_dict(child) for child in box.children],
        "index": box.index,
        "level": box.level,
        "focus": box.focus,
        "empty": box.empty,
    }
    if box.crossed:
        record["crossed"] = True
    if box.placeholder is not None:
        record["placeholder"] = box.placeholder
    return record


def box_from_dict(record: Dict[str, Any]) -> Box:
    """
    Build a box from a plain record.

    Raises:
        FlowFormatError: If the record is not a mapping or lacks children.
    """
    if not isinstance(record, dict):
        raise FlowFormatError(f"Expected a box record, got {type(record).__name__}")
    children = record.get("children", [])
    if not isinstance(children, list):
        raise FlowFormatError("Box children must be a list")

    return Box(
        content=str(record.get("content", "")),
        children=[box_from_dict(child) for child in children],
        index=int(record.get("index", 0)),
        level=int(record.get("level", 1)),
        focus=False,
        empty=bool(record.get("empty", False)),
        crossed=bool(record.get("crossed", False)),
        placeholder=record.get("placeholder"),
    )


def flow_to_dict(document: FlowDocument) -> Dict[str, Any]:
    """Convert a document to a plain record."""
    record: Dict[str, Any] = {
        "id": document.id,
        "content": document.title,
        "columns": list(document.columns),
        "invert": document.invert,
        "children": [box_to_dict(box) for box in document.children],
        "archived": document.archived,
        "lastFocus": list(document.last_focus),
    }
    if document.allow_empty:
        record["allowEmpty"] = True
    for key, value in document.metadata.items():
        record.setdefault(key, value)
    return record


def flow_from_dict(record: Dict[str, Any]) -> FlowDocument:
    """
    Build a document from a plain record.

    Raises:
        FlowFormatError: If required fields are missing or malformed.
    """
    if not isinstance(record, dict):
        raise FlowFormatError(f"Expected a flow record, got {type(record).__name__}")
    if "id" not in record or "columns" not in record:
        raise FlowFormatError("Flow record needs 'id' and 'columns'")
    if not isinstance(record["columns"], list):
        raise FlowFormatError("Flow columns must be a list")

    children = record.get("children", [])
    if not isinstance(children, list):
        raise FlowFormatError("Flow children must be a list")

    return FlowDocument(
        id=record["id"],
        title=str(record.get("content", "")),
        columns=[str(name) for name in record["columns"]],
        invert=bool(record.get("invert", False)),
        children=[box_from_dict(box) for box in children],
        archived=bool(record.get("archived", False)),
        last_focus=list(record.get("lastFocus", [])),
        allow_empty=bool(record.get("allowEmpty", False)),
        metadata={key: value for key, value in record.items() if key not in FLOW_KEYS},
    )


def dumps(flows: Union[FlowDocument, List[FlowDocument]], indent: int = 2) -> str:
    """Serialize one document, or a list of documents, to JSON text."""
    if isinstance(flows, FlowDocument):
        return json.dumps(flow_to_dict(flows), indent=indent, ensure_ascii=False)
    return json.dumps([flow_to_dict(flow) for flow in flows], indent=indent, ensure_ascii=False)


def loads(text: str) -> Union[FlowDocument, List[FlowDocument]]:
    """
    Parse JSON text holding one document or a list of documents.

    Raises:
        FlowFormatError: If the text is not valid JSON or not flow data.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FlowFormatError(f"Failed to parse flows: {exc}") from exc

    if isinstance(data, list):
        return [flow_from_dict(record) for record in data]
    return flow_from_dict(data)


def save_flows(filename: Union[str, FilePath], flows: List[FlowDocument]) -> FilePath:
    """
    Write a list of documents to a JSON file.

    Returns:
        Path of the written file.
    """
    output_path = FilePath(filename)
    output_path.write_text(dumps(list(flows)), encoding="utf-8")
    return output_path


def load_flows(filename: Union[str, FilePath]) -> List[FlowDocument]:
    """
    Read a list of documents from a JSON file.

    Raises:
        FlowFormatError: If the file does not hold a JSON array of flows.
        OSError: If the file cannot be read.
    """
    flows = loads(FilePath(filename).read_text(encoding="utf-8"))
    if not isinstance(flows, list):
        raise FlowFormatError("Invalid file format: expected a list of flows")
    return flows
