"""
File export for flows.

Flows can be written as:
- Text files (.txt) - the ASCII rendering
- PNG images - the ASCII rendering rasterized with a monospace font
- JSON files (.json) - the stored document format, readable by load_flows

Crossed-out boxes keep their dashed borders in both text and PNG output.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .models import FlowDocument
from .renderer import FlowRenderer
from .serialization import save_flows

logger = logging.getLogger(__name__)


class FlowExporter:
    """
    Exports flows to various file formats.

    Attributes:
        default_font: Default font name for PNG export.
        renderer: FlowRenderer used for text and PNG output.
    """

    def __init__(self, default_font: Optional[str] = None, renderer: Optional[FlowRenderer] = None):
        """
        Initialize the exporter.

        Args:
            default_font: Default font name for PNG export (e.g., "Cascadia Code").
            renderer: Renderer to draw flows with (default: FlowRenderer()).
        """
        self.default_font = default_font
        self.renderer = renderer or FlowRenderer()

    def save_txt(self, document: FlowDocument, filename: Union[str, Path]) -> Path:
        """
        Save the ASCII rendering of a flow to a text file.

        Args:
            document: The flow to export.
            filename: Output filename (should end in .txt).

        Returns:
            Path of the written file.
        """
        output_path = Path(filename)
        output_path.write_text(self.renderer.render(document) + "\n", encoding="utf-8")
        logger.debug("Wrote flow %s to %s", document.id, output_path)
        return output_path

    def save_json(self, flows: Union[FlowDocument, List[FlowDocument]], filename: Union[str, Path]) -> Path:
        """Save one flow, or a list of flows, as a JSON array."""
        if isinstance(flows, FlowDocument):
            flows = [flows]
        output_path = save_flows(filename, flows)
        logger.debug("Wrote %d flow(s) to %s", len(flows), output_path)
        return output_path

    def save_png(
        self,
        document: FlowDocument,
        filename: Union[str, Path],
        font_size: int = 16,
        bg_color: str = "#FFFFFF",
        fg_color: str = "#000000",
        padding: int = 20,
        font: Optional[str] = None,
        scale: int = 2,
    ) -> Path:
        """
        Save a flow as a high-resolution PNG image.

        Args:
            document: The flow to export.
            filename: Output filename (should end in .png).
            font_size: Font size in points (higher = higher resolution).
            bg_color: Background color as hex string (e.g., "#FFFFFF").
            fg_color: Foreground/text color as hex string (e.g., "#000000").
            padding: Padding around the flow in pixels.
            font: Font name to use (overrides default_font if provided).
            scale: Resolution multiplier for crisp output (default 2 for retina).

        Returns:
            Path of the written file.

        Example:
            >>> exporter = FlowExporter(default_font="Cascadia Code")
            >>> exporter.save_png(document, "aff.png", font_size=24)
        """
        lines = self.renderer.render(document).split("\n")

        font_name = font or self.default_font
        loaded_font = self._load_monospace_font(font_size * scale, font_name)

        # Character cell from a reference character
        bbox = loaded_font.getbbox("M")
        char_width = max(bbox[2] - bbox[0], 1)
        char_height = max(bbox[3] - bbox[1], 1)
        line_height = int(char_height * 1.2)

        scaled_padding = padding * scale
        max_line_len = max(len(line) for line in lines) if lines else 0
        img_width = max(char_width * max_line_len + scaled_padding * 2, 100 * scale)
        img_height = max(line_height * len(lines) + scaled_padding * 2, 100 * scale)

        img = Image.new("RGB", (img_width, img_height), bg_color)
        draw = ImageDraw.Draw(img)

        y = scaled_padding
        for line in lines:
            draw.text((scaled_padding, y), line, font=loaded_font, fill=fg_color)
            y += line_height

        output_path = Path(filename)
        img.save(output_path, "PNG")
        logger.debug("Wrote %dx%d image of flow %s to %s", img_width, img_height, document.id, output_path)
        return output_path

    def _load_monospace_font(self, font_size: int, font_name: Optional[str] = None) -> ImageFont.FreeTypeFont:
        """
        Load a monospace font for PNG rendering.

        Tries the requested font, then common system monospace fonts, then
        Pillow's default font.
        """
        fonts_to_try = [font_name] if font_name else []
        fonts_to_try.extend(
            [
                "DejaVuSansMono",
                "DejaVu Sans Mono",
                "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
                "Menlo",
                "/System/Library/Fonts/Menlo.ttc",
                "Consolas",
                "C:/Windows/Fonts/consola.ttf",
            ]
        )

        for candidate in fonts_to_try:
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                continue

        logger.debug("No monospace font found, using Pillow's default font")
        return ImageFont.load_default(size=font_size)
