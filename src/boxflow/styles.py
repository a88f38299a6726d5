"""
Debate-style presets.

A debate style describes the flows a round needs: the primary flow (the
affirmative case) and, for most styles, a secondary flow for the other
side's positions. Each flow preset names its columns (one per speech), an
alternative column order for rounds where the speaking order is swapped,
its color banding and any rows it starts with.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .models import FlowDocument, create_document


@dataclass
class FlowStyle:
    """
    Preset for one kind of flow.

    Attributes:
        name: Default title of flows created from the preset.
        columns: Speech names, one column each.
        columns_switch: Column order used when speakers are switched.
        invert: Whether color banding starts on the other color.
        starter_rows: Contents of the rows a new flow starts with.
    """

    name: str
    columns: List[str]
    columns_switch: Optional[List[str]] = None
    invert: bool = False
    starter_rows: List[str] = field(default_factory=list)


@dataclass
class DebateStyle:
    """Primary and optional secondary flow presets of a debate format."""

    primary: FlowStyle
    secondary: Optional[FlowStyle] = None


DEBATE_STYLES: Dict[str, DebateStyle] = {
    "policy": DebateStyle(
        primary=FlowStyle(
            name="Aff",
            columns=["1AC", "1NC", "2AC", "2NC/1NR", "1AR", "2NR", "2AR"],
        ),
        secondary=FlowStyle(
            name="Off",
            columns=["1NC", "2AC", "2NC/1NR", "1AR", "2NR", "2AR"],
            invert=True,
        ),
    ),
    "lincolnDouglas": DebateStyle(
        primary=FlowStyle(
            name="Aff",
            columns=["AC", "NC", "1AR", "NR", "2AR"],
            starter_rows=["Value", "Criterion"],
        ),
        secondary=FlowStyle(
            name="Neg",
            columns=["NC", "1AR", "NR", "2AR"],
            invert=True,
        ),
    ),
    "publicForum": DebateStyle(
        primary=FlowStyle(
            name="Pro",
            columns=["PC", "CC", "PR", "CR", "PS", "CS", "PFF", "CFF"],
            columns_switch=["CC", "PC", "CR", "PR", "CS", "PS", "CFF", "PFF"],
        ),
        secondary=FlowStyle(
            name="Con",
            columns=["CC", "PR", "CR", "PS", "CS", "PFF", "CFF"],
            columns_switch=["PC", "CR", "PR", "CS", "PS", "CFF", "PFF"],
            invert=True,
        ),
    ),
    "congress": DebateStyle(
        primary=FlowStyle(name="Bill", columns=["Aff", "Neg"]),
    ),
}

# Order in which styles are offered; settings store the position.
STYLE_ORDER: List[str] = ["policy", "publicForum", "lincolnDouglas", "congress"]


def get_style(style: Union[str, int]) -> DebateStyle:
    """
    Look up a style by name or by its position in ``STYLE_ORDER``.

    Raises:
        ValueError: If the style is unknown.
    """
    if isinstance(style, int):
        if not 0 <= style < len(STYLE_ORDER):
            raise ValueError(f"Unknown debate style index: {style}")
        style = STYLE_ORDER[style]
    if style not in DEBATE_STYLES:
        raise ValueError(f"Unknown debate style: {style}")
    return DEBATE_STYLES[style]


def new_flow(
    style: Union[str, int],
    kind: str = "primary",
    switch_speakers: bool = False,
    doc_id: int = 0,
) -> Optional[FlowDocument]:
    """
    Create a flow from a debate-style preset.

    Args:
        style: Style name or position in ``STYLE_ORDER``.
        kind: "primary" or "secondary".
        switch_speakers: Use the swapped column order when the preset has one.
        doc_id: Identity of the new document.

    Returns:
        The new document, or None when a secondary flow is requested from
        a style that has none.

    Raises:
        ValueError: If the style or kind is unknown.
    """
    if kind not in ("primary", "secondary"):
        raise ValueError("kind must be 'primary' or 'secondary'")

    debate_style = get_style(style)
    preset = debate_style.primary if kind == "primary" else debate_style.secondary
    if preset is None:
        return None

    columns = preset.columns
    if switch_speakers and preset.columns_switch:
        columns = preset.columns_switch

    return create_document(
        columns,
        invert=preset.invert,
        starter_rows=preset.starter_rows,
        doc_id=doc_id,
        title=preset.name,
    )
