"""Tree — Cleaned SVG text to the SvgNode IR."""

from svgsvelte.tree.parser import parse, to_node

__all__ = ["parse", "to_node"]
