"""
Tests for batch conversion helpers.
"""

import json
from pathlib import Path

import pytest

from svgsvelte.core.batch import BatchReport, convert_file, find_svg_files
from svgsvelte.core.errors import ParseError
from svgsvelte.ir.enums import ConversionStatus
from svgsvelte.ir.schema import ConvertOptions


class TestBatchReport:
    """Tests for result aggregation."""

    def test_counts(self):
        report = BatchReport(input_dir=Path("icons"))
        report.record_success(Path("a.svg"), Path("A.svelte"))
        report.record_success(Path("b.svg"), Path("B.svelte"))
        report.record_failure(Path("c.svg"), ValueError("boom"))

        assert report.succeeded_count == 2
        assert report.failed_count == 1
        assert report.total_count == 3
        assert [r.source.name for r in report.failures] == ["c.svg"]
        assert report.failures[0].status == ConversionStatus.FAILED
        assert report.failures[0].error == "boom"

    def test_empty(self):
        report = BatchReport(input_dir=Path("icons"))
        assert report.succeeded_count == 0
        assert report.failed_count == 0


class TestFindSvgFiles:
    """Tests for find_svg_files."""

    def test_sorted_svgs_only(self, tmp_path):
        for name in ["b.svg", "a.svg", "notes.txt", "c.svg.bak"]:
            (tmp_path / name).write_text("", encoding="utf-8")
        (tmp_path / "dir.svg").mkdir()
        assert [p.name for p in find_svg_files(tmp_path)] == ["a.svg", "b.svg"]


class TestConvertFile:
    """Tests for convert_file."""

    def test_writes_component(self, tmp_path, data_dir):
        output = tmp_path / "out" / "Circle.svelte"
        assert convert_file(data_dir / "circle.svg", output) == output
        assert output.read_text(encoding="utf-8").startswith('<script lang="ts">')

    def test_writes_tree(self, tmp_path, data_dir):
        output = tmp_path / "Circle.json"
        convert_file(data_dir / "circle.svg", output, output_format="tree")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["children"]["circle"]["attributes"]["r"] == "10"

    def test_options_passed_through(self, tmp_path):
        source = tmp_path / "logo.svg"
        source.write_text('<svg class="logo"><path d="M0 0"/></svg>', encoding="utf-8")
        output = tmp_path / "Logo.svelte"
        convert_file(source, output, options=ConvertOptions(include_class=True))
        assert "className" in output.read_text(encoding="utf-8")

    def test_failure_writes_nothing(self, tmp_path, data_dir):
        output = tmp_path / "WithImage.svelte"
        with pytest.raises(ParseError):
            convert_file(data_dir / "with_image.svg", output)
        assert not output.exists()

    def test_unknown_format(self, tmp_path, data_dir):
        with pytest.raises(ValueError):
            convert_file(data_dir / "circle.svg", tmp_path / "x", output_format="html")
