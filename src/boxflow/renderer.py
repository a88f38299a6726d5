"""
ASCII renderer for flows.

Draws a flow the way it is read: one column per speech, column names
across the top, each box in the column of its level. A box never sits
above its parent, so a response starts level with the argument it
answers. Crossed-out boxes get dashed borders; placeholders keep their
place in the layout but draw nothing.
"""

from dataclasses import dataclass
from typing import Dict, List

from .models import Box, FlowDocument

# Unicode box-drawing characters
BOX_CHARS = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "─",
    "vertical": "│",
    "shadow": "░",
}

# Borders of crossed-out boxes
BOX_CHARS_CROSSED = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "╌",
    "vertical": "┆",
    "shadow": "░",
}

HEADER_RULE = "═"


@dataclass
class BoxDimensions:
    """Dimensions of a rendered box."""

    width: int  # Total width including border
    height: int  # Total height including border
    text_lines: List[str]  # Wrapped text lines
    padding: int = 1  # Internal padding


@dataclass
class PlacedBox:
    """A box with its canvas position."""

    box: Box
    column: int
    x: int
    y: int
    dimensions: BoxDimensions


class Canvas:
    """
    A 2D character canvas for drawing ASCII art.
    """

    def __init__(self, width: int, height: int, fill_char: str = " "):
        self.width = width
        self.height = height
        self.grid: List[List[str]] = [
            [fill_char for _ in range(width)] for _ in range(height)
        ]

    def set(self, x: int, y: int, char: str) -> None:
        """Set a character at position (x, y)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.grid[y][x] = char

    def draw_text(self, x: int, y: int, text: str) -> None:
        """Draw text starting at position (x, y)."""
        for i, char in enumerate(text):
            self.set(x + i, y, char)

    def render(self) -> str:
        """Render the canvas to a string."""
        lines = []
        for row in self.grid:
            line = "".join(row).rstrip()
            lines.append(line)

        # Remove trailing empty lines
        while lines and not lines[-1]:
            lines.pop()

        return "\n".join(lines)


class BoxRenderer:
    """
    Renders fixed-width boxes with shadows and wrapped text.
    """

    def __init__(self, max_text_width: int = 18, padding: int = 1, shadow: bool = True):
        self.max_text_width = max_text_width
        self.padding = padding
        self.shadow = shadow

    @property
    def box_width(self) -> int:
        """Width of every box: text + 2*padding + 2 borders."""
        return self.max_text_width + 2 * self.padding + 2

    def wrap(self, text: str) -> List[str]:
        """
        Wrap text to max_text_width.

        Line breaks in the text are kept; words longer than the width are
        split.
        """
        lines: List[str] = []
        for paragraph in text.split("\n"):
            current_line: List[str] = []
            current_length = 0

            for word in paragraph.split():
                while len(word) > self.max_text_width:
                    if current_line:
                        lines.append(" ".join(current_line))
                        current_line, current_length = [], 0
                    lines.append(word[: self.max_text_width])
                    word = word[self.max_text_width :]
                if not word:
                    continue

                space_needed = 1 if current_line else 0
                if current_length + len(word) + space_needed <= self.max_text_width:
                    current_line.append(word)
                    current_length += len(word) + space_needed
                else:
                    lines.append(" ".join(current_line))
                    current_line = [word]
                    current_length = len(word)

            lines.append(" ".join(current_line))

        # Drop blank lines at the end, but keep at least one line
        while len(lines) > 1 and not lines[-1]:
            lines.pop()
        return lines or [""]

    def calculate_box_dimensions(self, text: str) -> BoxDimensions:
        """Calculate box dimensions based on text content."""
        lines = self.wrap(text)
        return BoxDimensions(
            width=self.box_width,
            height=len(lines) + 2,
            text_lines=lines,
            padding=self.padding,
        )

    def draw_box(
        self,
        canvas: Canvas,
        x: int,
        y: int,
        dimensions: BoxDimensions,
        crossed: bool = False,
    ) -> None:
        """
        Draw a box with shadow at position (x, y).

        ┌────────────┐
        │ text       │░
        └────────────┘░
         ░░░░░░░░░░░░░░
        """
        chars = BOX_CHARS_CROSSED if crossed else BOX_CHARS
        w = dimensions.width
        h = dimensions.height

        canvas.set(x, y, chars["top_left"])
        for i in range(1, w - 1):
            canvas.set(x + i, y, chars["horizontal"])
        canvas.set(x + w - 1, y, chars["top_right"])

        for row in range(1, h - 1):
            canvas.set(x, y + row, chars["vertical"])
            canvas.set(x + w - 1, y + row, chars["vertical"])
            if self.shadow:
                canvas.set(x + w, y + row, chars["shadow"])

        canvas.set(x, y + h - 1, chars["bottom_left"])
        for i in range(1, w - 1):
            canvas.set(x + i, y + h - 1, chars["horizontal"])
        canvas.set(x + w - 1, y + h - 1, chars["bottom_right"])

        if self.shadow:
            canvas.set(x + w, y + h - 1, chars["shadow"])
            for i in range(1, w + 1):
                canvas.set(x + i, y + h, chars["shadow"])

        # Text is left-aligned after the padding
        for line_idx, line in enumerate(dimensions.text_lines):
            canvas.draw_text(x + 1 + dimensions.padding, y + 1 + line_idx, line)


class FlowRenderer:
    """
    Renders a flow document as ASCII art.

    Example:
        >>> renderer = FlowRenderer(max_text_width=10)
        >>> print(renderer.render(document))
    """

    def __init__(
        self,
        max_text_width: int = 18,
        column_spacing: int = 3,
        vertical_spacing: int = 1,
        shadow: bool = False,
        show_title: bool = True,
    ):
        """
        Initialize the renderer.

        Args:
            max_text_width: Text width inside a box before wrapping (default: 18)
            column_spacing: Blank characters between columns (default: 3)
            vertical_spacing: Blank lines between boxes in a column (default: 1)
            shadow: Whether to draw box shadows (default: False)
            show_title: Whether to print the flow title above the columns
        """
        if max_text_width < 1:
            raise ValueError("max_text_width must be at least 1")
        self.column_spacing = max(column_spacing, 2 if shadow else 1)
        self.vertical_spacing = vertical_spacing
        self.show_title = show_title
        self.box_renderer = BoxRenderer(max_text_width=max_text_width, shadow=shadow)

    def column_x(self, column: int) -> int:
        return column * (self.box_renderer.box_width + self.column_spacing)

    def layout(self, document: FlowDocument) -> List[PlacedBox]:
        """
        Assign canvas positions to every visible box.

        Each column fills top-down. A box starts no higher than the next
        free line of its column and no higher than its parent.
        """
        top = self._header_height(document)
        cursors: Dict[int, int] = {column: top for column in range(len(document.columns))}
        shadow = 1 if self.box_renderer.shadow else 0
        placed: List[PlacedBox] = []

        def place(box: Box, column: int, y_min: int) -> None:
            if column >= len(document.columns):
                return
            y = max(cursors[column], y_min)
            if not box.empty:
                dims = self.box_renderer.calculate_box_dimensions(box.content)
                placed.append(PlacedBox(box, column, self.column_x(column), y, dims))
                cursors[column] = y + dims.height + shadow + self.vertical_spacing
            for child in box.children:
                place(child, column + 1, y)

        for box in document.children:
            place(box, 0, top)
        return placed

    def render(self, document: FlowDocument) -> str:
        """Render the document to a string."""
        placed = self.layout(document)
        columns = len(document.columns)
        width = max(self.column_x(columns) - self.column_spacing + 2, 1)
        bottom = max((p.y + p.dimensions.height + 1 for p in placed), default=0)
        height = max(bottom, self._header_height(document)) + 1

        canvas = Canvas(width, height)
        self._draw_header(canvas, document)
        for item in placed:
            self.box_renderer.draw_box(
                canvas, item.x, item.y, item.dimensions, crossed=item.box.crossed
            )
        return canvas.render()

    def _header_height(self, document: FlowDocument) -> int:
        # Column names and the rule under them, plus the title line
        return 3 if self.show_title and document.title else 2

    def _draw_header(self, canvas: Canvas, document: FlowDocument) -> None:
        y = 0
        if self.show_title and document.title:
            canvas.draw_text(0, y, document.title)
            y += 1

        box_width = self.box_renderer.box_width
        for column, name in enumerate(document.columns):
            x = self.column_x(column)
            label = name[:box_width]
            canvas.draw_text(x + (box_width - len(label)) // 2, y, label)
            for i in range(box_width):
                canvas.set(x + i, y + 1, HEADER_RULE)


def render_flow(document: FlowDocument, **kwargs) -> str:
    """
    Convenience function to render a flow.

    Args:
        document: The flow to draw
        **kwargs: Additional parameters for FlowRenderer

    Returns:
        ASCII string representation of the flow
    """
    return FlowRenderer(**kwargs).render(document)
