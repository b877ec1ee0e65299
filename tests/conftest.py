"""
Shared fixtures for the svgsvelte test suite.
"""

from pathlib import Path

import pytest

from svgsvelte.core.logging import configure_logging
from svgsvelte.ir.schema import SvgNode

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep structured log output out of test reports."""
    configure_logging(level="silent", force=True)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def load_svg():
    """Read an SVG fixture by file name."""
    def _load(name: str) -> str:
        return (DATA_DIR / name).read_text(encoding="utf-8")
    return _load


@pytest.fixture
def circle_tree() -> SvgNode:
    """<svg width="24" height="24"><circle cx="12" cy="12" r="10"/></svg> as a tree."""
    return SvgNode(
        attributes={"width": "24", "height": "24"},
        children={"circle": SvgNode(attributes={"cx": "12", "cy": "12", "r": "10"})},
    )
