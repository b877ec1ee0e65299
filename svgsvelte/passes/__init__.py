"""Passes — Pipeline stages for SVG to Svelte conversion."""

from svgsvelte.passes.p00_normalize import normalize
from svgsvelte.passes.p10_parse import parse
from svgsvelte.passes.p20_generate import generate

__all__ = [
    "normalize",
    "parse",
    "generate",
]
