"""Unit tests for the paths module."""

from dataclasses import replace

import pytest

from boxflow.models import Box
from boxflow.paths import (
    get_siblings,
    parent_of,
    reindex,
    resolve,
    sibling_path,
    update_node,
    update_siblings,
)
from boxflow.tree import iter_boxes


class TestResolve:
    """Tests for resolve()."""

    def test_resolve_top_level(self, sample_tree):
        """Test resolving a top-level row."""
        assert resolve(sample_tree, [1]).content == "Contention 2"

    def test_resolve_nested(self, sample_tree):
        """Test resolving a box three levels down."""
        assert resolve(sample_tree, [0, 0, 0]).content == "Extend"

    def test_resolve_empty_path(self, sample_tree):
        """Test the empty path names no box."""
        assert resolve(sample_tree, []) is None

    def test_resolve_out_of_range(self, sample_tree):
        """Test out-of-range segments return None instead of raising."""
        assert resolve(sample_tree, [5]) is None
        assert resolve(sample_tree, [0, 9]) is None
        assert resolve(sample_tree, [1, 0]) is None
        assert resolve(sample_tree, [-1]) is None

    def test_every_box_has_exactly_one_path(self, sample_tree):
        """Test each reachable box is found at the path it was reached by."""
        seen = []
        for path, box in iter_boxes(sample_tree):
            assert resolve(sample_tree, path) is box
            seen.append(tuple(path))
        assert len(seen) == len(set(seen)) == 7


class TestPathHelpers:
    """Tests for sibling and parent helpers."""

    def test_get_siblings_root(self, sample_tree):
        """Test the empty parent gives the top-level list."""
        assert get_siblings(sample_tree, []) is sample_tree

    def test_get_siblings_nested(self, sample_tree):
        """Test siblings under a box are its children."""
        siblings = get_siblings(sample_tree, [0])
        assert [box.content for box in siblings] == ["Non-unique", "Turn"]

    def test_get_siblings_missing(self, sample_tree):
        """Test an unknown parent gives None."""
        assert get_siblings(sample_tree, [9]) is None

    def test_parent_of(self):
        """Test parent path."""
        assert parent_of([0, 2, 1]) == [0, 2]
        assert parent_of([3]) == []

    def test_sibling_path(self):
        """Test sibling path keeps the parent."""
        assert sibling_path([0, 2, 1], 4) == [0, 2, 4]


class TestReindex:
    """Tests for reindex()."""

    def test_reindex_fixes_positions(self):
        """Test indices are rewritten to match positions."""
        boxes = [Box(content="a", index=3), Box(content="b", index=0)]
        result = reindex(boxes)
        assert [box.index for box in result] == [0, 1]

    def test_reindex_reuses_correct_boxes(self):
        """Test boxes that already have the right index are shared."""
        good = Box(content="a", index=0)
        bad = Box(content="b", index=5)
        result = reindex([good, bad])
        assert result[0] is good
        assert result[1] is not bad

    def test_reindex_does_not_modify_input(self):
        """Test the input list and boxes are left alone."""
        boxes = [Box(index=2)]
        result = reindex(boxes)
        assert result is not boxes
        assert boxes[0].index == 2


class TestUpdateNode:
    """Tests for ancestor-chain rebuilding."""

    def test_update_nested_box(self, sample_tree):
        """Test a nested box is replaced."""
        result = update_node(sample_tree, [0, 0, 0], lambda box: replace(box, content="Extend 2"))
        assert resolve(result, [0, 0, 0]).content == "Extend 2"

    def test_input_untouched(self, sample_tree):
        """Test the input tree is not modified."""
        update_node(sample_tree, [0, 0, 0], lambda box: replace(box, content="x"))
        assert resolve(sample_tree, [0, 0, 0]).content == "Extend"

    def test_only_ancestor_chain_is_rebuilt(self, sample_tree):
        """Test unrelated rows and subtrees are shared with the old tree."""
        result = update_node(sample_tree, [0, 0, 0], lambda box: replace(box, content="x"))
        assert result is not sample_tree
        assert result[0] is not sample_tree[0]
        assert result[0].children[0] is not sample_tree[0].children[0]
        assert result[1] is sample_tree[1]
        assert result[2] is sample_tree[2]
        assert result[0].children[1] is sample_tree[0].children[1]

    def test_update_empty_path_raises(self, sample_tree):
        """Test the empty path cannot be updated."""
        with pytest.raises(IndexError):
            update_node(sample_tree, [], lambda box: box)

    def test_update_bad_path_raises(self, sample_tree):
        """Test a bad path raises IndexError."""
        with pytest.raises(IndexError):
            update_node(sample_tree, [0, 7], lambda box: box)
        with pytest.raises(IndexError):
            update_siblings(sample_tree, [9], list)
