"""
Contracts — Type definitions and interfaces for pipeline components.
"""

from typing import Protocol

from svgsvelte.core.context import ConversionContext


class Pass(Protocol):
    """Protocol for pipeline passes."""

    __name__: str

    def __call__(self, ctx: ConversionContext) -> ConversionContext:
        """Apply the pass to the context."""
        ...
