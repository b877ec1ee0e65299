"""Render — Svelte component text from the IR."""

from svgsvelte.render.component import generate, render_component
from svgsvelte.render.props import binding_name, derive_props, root_attributes

__all__ = [
    "binding_name",
    "derive_props",
    "generate",
    "render_component",
    "root_attributes",
]
