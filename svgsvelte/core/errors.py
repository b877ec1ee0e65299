"""
Errors — Exception taxonomy for the conversion pipeline.

Every failure is terminal for the conversion that raised it.
The engine never catches and re-wraps these; callers decide
whether to continue (batch) or stop (single file).
"""

from typing import Optional

from svgsvelte.ir.enums import ParseErrorCode, UnsupportedElement


class ConversionError(Exception):
    """Base class for all conversion failures."""


class NormalizationError(ConversionError):
    """The cleanup stage could not process the input."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"SVG preprocessing failed: {message}")
        self.cause = cause


class ParseError(ConversionError):
    """
    The document is not a valid single-root SVG tree.

    Attributes:
        code: Which check rejected the document
        line: Line number of a syntax error, when known
        element: Reserved element kind for UNSUPPORTED_ELEMENT failures
    """

    def __init__(
        self,
        message: str,
        code: ParseErrorCode,
        line: Optional[int] = None,
        element: Optional[UnsupportedElement] = None,
    ):
        super().__init__(f"Invalid SVG: {message}")
        self.code = code
        self.line = line
        self.element = element
