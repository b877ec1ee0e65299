"""
IR Serialization — JSON import/export for parsed trees.
"""

from pathlib import Path
from typing import Union

from svgsvelte.ir.schema import SvgNode


def to_json(tree: SvgNode, indent: int = 2) -> str:
    """Serialize an SvgNode tree to a JSON string."""
    return tree.model_dump_json(indent=indent, exclude_none=True)


def from_json(json_str: str) -> SvgNode:
    """Deserialize an SvgNode tree from a JSON string."""
    return SvgNode.model_validate_json(json_str)


def save(tree: SvgNode, path: Union[str, Path]) -> None:
    """Save an SvgNode tree to a JSON file."""
    path = Path(path)
    path.write_text(to_json(tree), encoding="utf-8")


def load(path: Union[str, Path]) -> SvgNode:
    """Load an SvgNode tree from a JSON file."""
    path = Path(path)
    return from_json(path.read_text(encoding="utf-8"))
