"""
Tests for component file naming.
"""

import pytest

from svgsvelte.cli.naming import component_file_name, to_pascal_case


class TestPascalCase:
    """Tests for to_pascal_case."""

    @pytest.mark.parametrize("name,expected", [
        ("icon-name", "IconName"),
        ("icon_name", "IconName"),
        ("iconName", "IconName"),
        ("ARROW-left", "ArrowLeft"),
        ("x", "X"),
        ("chevron--down_", "ChevronDown"),
        ("icon-24", "Icon24"),
    ])
    def test_to_pascal_case(self, name, expected):
        assert to_pascal_case(name) == expected


class TestComponentFileName:
    """Tests for component_file_name."""

    def test_svelte_name(self):
        assert component_file_name("icons/arrow-left.svg") == "ArrowLeft.svelte"

    def test_custom_suffix(self):
        assert component_file_name("arrow-left.svg", suffix=".json") == "ArrowLeft.json"
