"""
svgsvelte — SVG to Svelte component converter

A deterministic pipeline that turns a standalone SVG document into a
Svelte component whose root attributes become overridable props.

normalize → parse + validate → generate. Nothing else.
"""

__version__ = "0.1.0"
