"""
Tests for tree JSON serialization.
"""

import json

from svgsvelte.ir.schema import SvgNode
from svgsvelte.ir.serialization import from_json, load, save, to_json
from svgsvelte.tree.parser import parse


class TestSerialization:
    """Tests for SvgNode <-> JSON."""

    def test_to_json_shape(self, circle_tree):
        data = json.loads(to_json(circle_tree))
        assert data["attributes"] == {"width": "24", "height": "24"}
        assert data["children"]["circle"]["attributes"]["r"] == "10"
        assert "text" not in data

    def test_lists_survive(self):
        tree = parse('<svg><path d="a"/><path d="b"/><title>T</title></svg>')
        restored = from_json(to_json(tree))
        assert restored.model_dump() == tree.model_dump()
        assert isinstance(restored.children["path"], list)
        assert restored.first_child("title").text == "T"

    def test_save_and_load(self, tmp_path, circle_tree):
        path = tmp_path / "tree.json"
        save(circle_tree, path)
        assert load(path).model_dump() == circle_tree.model_dump()

    def test_empty_node(self):
        assert from_json(to_json(SvgNode())).model_dump() == SvgNode().model_dump()
