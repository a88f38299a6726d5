"""Unit tests for the export module."""

from PIL import Image

from boxflow.export import FlowExporter
from boxflow.renderer import FlowRenderer
from boxflow.serialization import load_flows


class TestFlowExporter:
    """Tests for FlowExporter class."""

    def test_default_renderer(self):
        """Test an exporter builds its own renderer."""
        assert isinstance(FlowExporter().renderer, FlowRenderer)

    def test_save_txt(self, tmp_path, sample_doc):
        """Test the text file holds the ASCII rendering."""
        renderer = FlowRenderer(max_text_width=12)
        path = FlowExporter(renderer=renderer).save_txt(sample_doc, tmp_path / "aff.txt")
        assert path.read_text(encoding="utf-8") == renderer.render(sample_doc) + "\n"

    def test_save_png(self, tmp_path, sample_doc):
        """Test a PNG image is written."""
        path = FlowExporter().save_png(sample_doc, tmp_path / "aff.png", font_size=8, scale=1)
        with Image.open(path) as image:
            assert image.format == "PNG"
            assert image.width >= 100
            assert image.height >= 100

    def test_save_png_colors(self, tmp_path, sample_doc):
        """Test the background color fills the corners."""
        path = FlowExporter().save_png(
            sample_doc, tmp_path / "dark.png", bg_color="#000000", fg_color="#FFFFFF", scale=1
        )
        with Image.open(path) as image:
            assert image.convert("RGB").getpixel((0, 0)) == (0, 0, 0)

    def test_save_png_unknown_font_falls_back(self, tmp_path, sample_doc):
        """Test a missing font name does not stop the export."""
        exporter = FlowExporter(default_font="No Such Font Mono")
        path = exporter.save_png(sample_doc, tmp_path / "fallback.png", scale=1)
        assert path.exists()

    def test_save_json(self, tmp_path, sample_doc):
        """Test a single flow is saved as a one-element array."""
        path = FlowExporter().save_json(sample_doc, tmp_path / "flows.json")
        flows = load_flows(path)
        assert [flow.id for flow in flows] == [sample_doc.id]
