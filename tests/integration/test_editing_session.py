"""Integration tests replaying whole editing sessions."""

from boxflow import (
    FlowEditor,
    FlowExporter,
    FlowRenderer,
    check_invariants,
    load_flows,
    save_flows,
    to_rows,
)
from boxflow.paths import resolve
from boxflow.tree import strip_focus


def snapshot(document):
    return [strip_focus(box) for box in document.children]


def type_text(editor, document, path, text):
    return editor.apply_edit(document, path, {"content": text})


class TestLincolnDouglasRound:
    """Flows an LD round from the first speech to the rebuttals."""

    def flow_round(self, editor):
        aff = editor.new_flow("lincolnDouglas")
        neg = editor.new_flow("lincolnDouglas", "secondary")

        # AC: value, criterion and one contention
        type_text(editor, aff, [0], "Value: morality")
        type_text(editor, aff, [1], "Criterion: util")
        aff, focus = editor.navigate(aff, [1], "down")
        type_text(editor, aff, focus, "C1: lives")

        # NC answers on the aff flow
        aff, focus = editor.navigate(aff, [2], "right")
        type_text(editor, aff, focus, "No link")
        aff, focus = editor.navigate(aff, focus, "down")
        type_text(editor, aff, focus, "Turn")

        # NC offense on its own flow, 1AR answers there
        type_text(editor, neg, [0], "K: cap")
        neg, focus = editor.navigate(neg, [0], "right")
        type_text(editor, neg, focus, "Perm")

        # 1AR extends on the aff flow and drops the turn
        aff, focus = editor.navigate(aff, [2, 0], "right")
        type_text(editor, aff, focus, "Link is non-unique")
        editor.toggle_cross(aff, [2, 1])
        return aff, neg

    def test_round_builds_expected_tree(self):
        """Test the flow holds what was typed, where it was typed."""
        editor = FlowEditor(strict=True)
        aff, neg = self.flow_round(editor)

        assert to_rows(aff) == [
            ["Value: morality", "", "", "", ""],
            ["Criterion: util", "", "", "", ""],
            ["C1: lives", "No link", "Link is non-unique", "", ""],
        ]
        assert resolve(aff.children, [2, 1]).content == "Turn"
        assert resolve(aff.children, [2, 1]).crossed
        assert to_rows(neg) == [["K: cap", "Perm", "", ""]]
        check_invariants(aff.children, max_depth=aff.max_depth, single_focus=True)

    def test_histories_are_separate(self):
        """Test undo on one flow leaves the other alone."""
        editor = FlowEditor(strict=True)
        aff, neg = self.flow_round(editor)
        neg_before = snapshot(neg)

        while editor.undo(aff) is not None:
            pass

        assert snapshot(neg) == neg_before
        assert [box.content for box in aff.children] == ["Value", "Criterion"]
        assert editor.can_undo(neg)

    def test_undo_all_then_redo_all(self):
        """Test a full undo and redo returns to the end of the round."""
        editor = FlowEditor(strict=True)
        aff, _ = self.flow_round(editor)
        end = snapshot(aff)

        undone = 0
        while editor.undo(aff) is not None:
            undone += 1
        while editor.redo(aff) is not None:
            undone -= 1

        assert undone == 0
        assert snapshot(aff) == end

    def test_focus_moves_leave_no_history(self):
        """Test arrowing around an existing flow adds no undo steps."""
        editor = FlowEditor(strict=True)
        aff, _ = self.flow_round(editor)
        steps = len(editor.history(aff).past)

        for direction in ["left", "down", "up", "left", "up", "down"]:
            aff, _ = editor.navigate(aff, aff.last_focus, direction)

        assert len(editor.history(aff).past) == steps

    def test_save_reload_and_keep_editing(self, tmp_path):
        """Test saved flows reload and accept further edits."""
        editor = FlowEditor(strict=True)
        aff, neg = self.flow_round(editor)
        path = save_flows(tmp_path / "round.json", [aff, neg])

        fresh = FlowEditor(strict=True)
        loaded = [fresh.open_document(flow) for flow in load_flows(path)]
        assert [snapshot(flow) for flow in loaded] == [snapshot(aff), snapshot(neg)]
        assert all(not box.focus for flow in loaded for box in flow.children)

        reloaded_aff = loaded[0]
        assert not fresh.can_undo(reloaded_aff)
        reloaded_aff, focus = fresh.navigate(reloaded_aff, [2, 0, 0], "down")
        type_text(fresh, reloaded_aff, focus, "Cross-apply C1")
        assert resolve(reloaded_aff.children, [2, 0, 1]).content == "Cross-apply C1"
        assert fresh.new_flow("policy").id > max(flow.id for flow in loaded)

    def test_render_and_export(self, tmp_path):
        """Test the finished flow renders and exports."""
        editor = FlowEditor(strict=True)
        aff, _ = self.flow_round(editor)

        output = FlowRenderer(max_text_width=20).render(aff)
        for text in ["AC", "NC", "C1: lives", "No link", "Link is non-unique"]:
            assert text in output

        exporter = FlowExporter(renderer=FlowRenderer(max_text_width=20))
        assert exporter.save_txt(aff, tmp_path / "aff.txt").exists()
        assert exporter.save_png(aff, tmp_path / "aff.png", scale=1).exists()
