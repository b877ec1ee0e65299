"""
IR — Intermediate Representation

The parsed tree is the source of truth for generation.
Component text is a rendering of the IR.
"""

from svgsvelte.ir.enums import (
    AriaAttribute,
    ConversionStatus,
    NonEditableAttribute,
    ParseErrorCode,
    UnsupportedElement,
)
from svgsvelte.ir.schema import (
    ConvertOptions,
    PropSpec,
    SvgNode,
    TraceEntry,
)

__all__ = [
    # Enums
    "AriaAttribute",
    "ConversionStatus",
    "NonEditableAttribute",
    "ParseErrorCode",
    "UnsupportedElement",
    # Models
    "ConvertOptions",
    "PropSpec",
    "SvgNode",
    "TraceEntry",
]
