"""
Context — What a conversion carries from pass to pass.

p00_normalize fills normalized_text, p10_parse fills tree, and
p20_generate fills props and component_text. One context per document.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from svgsvelte.ir.schema import ConvertOptions, PropSpec, SvgNode, TraceEntry


@dataclass
class ConversionRequest:
    """A document to convert and how to convert it."""

    text: str
    options: ConvertOptions = field(default_factory=ConvertOptions)
    request_id: str = field(default_factory=lambda: str(uuid4()))
    # File name for log messages in batch mode
    source_name: Optional[str] = None


@dataclass
class ConversionContext:
    request: ConversionRequest
    raw_text: str
    normalized_text: str = ""
    tree: Optional[SvgNode] = None
    props: list[PropSpec] = field(default_factory=list)
    component_text: Optional[str] = None
    trace: list[TraceEntry] = field(default_factory=list)

    @property
    def options(self) -> ConvertOptions:
        return self.request.options

    @classmethod
    def from_request(cls, request: ConversionRequest) -> "ConversionContext":
        return cls(request=request, raw_text=request.text)

    def add_trace(
        self,
        pass_name: str,
        action: str,
        before: Optional[str] = None,
        after: Optional[str] = None,
    ) -> None:
        """Append what a pass did, as short before/after summaries."""
        entry = TraceEntry(
            id=str(uuid4()),
            timestamp=datetime.now(),
            pass_name=pass_name,
            action=action,
            before=before,
            after=after,
        )
        self.trace.append(entry)
