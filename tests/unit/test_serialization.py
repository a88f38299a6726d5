"""Unit tests for the serialization module."""

import json

import pytest

from boxflow.models import Box
from boxflow.paths import resolve
from boxflow.serialization import (
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
from boxflow.tree import set_focus, toggle_crossed


class TestBoxRecords:
    """Tests for box records."""

    def test_box_to_dict_fields(self):
        """Test the stored field names."""
        record = box_to_dict(Box(content="Turn", index=1, level=2))
        assert record == {
            "content": "Turn",
            "children": [],
            "index": 1,
            "level": 2,
            "focus": False,
            "empty": False,
        }

    def test_optional_flags_written_when_set(self):
        """Test crossed and placeholder appear only when set."""
        record = box_to_dict(Box(crossed=True, placeholder="type here"))
        assert record["crossed"] is True
        assert record["placeholder"] == "type here"

    def test_box_from_dict_nested(self, sample_tree):
        """Test nested records come back as the same tree."""
        assert box_from_dict(box_to_dict(sample_tree[0])) == sample_tree[0]

    def test_focus_normalized_on_load(self, sample_tree):
        """Test focus is never loaded."""
        focused = set_focus(sample_tree, [0, 0])
        record = box_to_dict(focused[0])
        assert record["children"][0]["focus"] is True
        assert not box_from_dict(record).children[0].focus

    def test_box_from_dict_defaults(self):
        """Test missing optional fields take defaults."""
        box = box_from_dict({"content": "x"})
        assert box.children == []
        assert box.level == 1
        assert not box.crossed

    def test_box_from_dict_bad_record(self):
        """Test malformed box records raise FlowFormatError."""
        with pytest.raises(FlowFormatError):
            box_from_dict(["not", "a", "box"])
        with pytest.raises(FlowFormatError):
            box_from_dict({"content": "x", "children": "y"})


class TestFlowRecords:
    """Tests for flow records."""

    def test_flow_to_dict(self, sample_doc):
        """Test flow-level keys."""
        record = flow_to_dict(sample_doc)
        assert record["id"] == 7
        assert record["content"] == "Aff"
        assert record["columns"] == ["1AC", "1NC", "2AC"]
        assert record["lastFocus"] == []
        assert record["roundId"] == 3
        assert "allowEmpty" not in record

    def test_flow_round_trip(self, sample_doc):
        """Test a flow survives a round trip."""
        sample_doc.children = toggle_crossed(sample_doc.children, [0, 1])
        restored = flow_from_dict(flow_to_dict(sample_doc))
        assert restored == sample_doc
        assert resolve(restored.children, [0, 1]).crossed

    def test_unknown_keys_kept_as_metadata(self):
        """Test keys the model does not know are carried along."""
        record = {"id": 1, "columns": ["AC"], "speechDocs": {"AC": "doc"}, "roundId": 9}
        doc = flow_from_dict(record)
        assert doc.metadata == {"speechDocs": {"AC": "doc"}, "roundId": 9}
        assert flow_to_dict(doc)["speechDocs"] == {"AC": "doc"}

    def test_missing_required_keys(self):
        """Test a flow needs an id and columns."""
        with pytest.raises(FlowFormatError):
            flow_from_dict({"columns": ["AC"]})
        with pytest.raises(FlowFormatError):
            flow_from_dict({"id": 1})
        with pytest.raises(FlowFormatError):
            flow_from_dict({"id": 1, "columns": "AC"})


class TestJson:
    """Tests for JSON text and files."""

    def test_dumps_loads_byte_identical(self, sample_doc):
        """Test serialize, load, serialize gives the same text."""
        text = dumps(sample_doc)
        assert dumps(loads(text)) == text

    def test_dumps_list(self, sample_doc):
        """Test a list of flows becomes a JSON array."""
        data = json.loads(dumps([sample_doc]))
        assert isinstance(data, list)
        assert data[0]["id"] == 7

    def test_dumps_keeps_unicode(self, sample_doc):
        """Test non-ASCII text is written as is."""
        sample_doc.title = "Neg – Kritik"
        assert "Neg – Kritik" in dumps(sample_doc)

    def test_loads_invalid_json(self):
        """Test unparsable text raises FlowFormatError."""
        with pytest.raises(FlowFormatError) as exc_info:
            loads("{not json")
        assert "Failed to parse" in str(exc_info.value)

    def test_save_and_load_flows(self, tmp_path, sample_doc):
        """Test writing and reading a flows file."""
        path = save_flows(tmp_path / "round.json", [sample_doc])
        assert path.exists()
        flows = load_flows(path)
        assert len(flows) == 1
        assert flows[0] == sample_doc

    def test_load_flows_needs_array(self, tmp_path, sample_doc):
        """Test a file holding a single flow is refused."""
        path = tmp_path / "single.json"
        path.write_text(dumps(sample_doc), encoding="utf-8")
        with pytest.raises(FlowFormatError) as exc_info:
            load_flows(path)
        assert "Invalid file format" in str(exc_info.value)

    def test_flow_format_error_is_value_error(self):
        """Test callers may catch ValueError."""
        assert issubclass(FlowFormatError, ValueError)
