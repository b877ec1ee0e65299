"""
IR Schema — Pydantic models for the parsed SVG tree and derived props.

The tree mirrors the document exactly; everything the generator
emits is a rendering of these models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SvgNode(BaseModel):
    """
    One markup element.

    Attribute and child order are significant: they decide the order
    in which the generator emits attributes and elements.
    """

    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Attribute name -> value, in document order",
    )
    children: dict[str, Union[SvgNode, list[SvgNode]]] = Field(
        default_factory=dict,
        description="Child tag name -> element, or list of elements when the tag repeats",
    )
    text: Optional[str] = Field(
        default=None,
        description="Trimmed character data of the element (None if blank)",
    )

    def iter_children(self) -> list[tuple[str, SvgNode]]:
        """Flatten child entries into (tag, node) pairs, preserving order."""
        flat: list[tuple[str, SvgNode]] = []
        for tag, entry in self.children.items():
            if isinstance(entry, list):
                flat.extend((tag, item) for item in entry)
            else:
                flat.append((tag, entry))
        return flat

    def first_child(self, tag: str) -> Optional[SvgNode]:
        """Return the first child element with this tag, if any."""
        entry = self.children.get(tag)
        if isinstance(entry, list):
            return entry[0] if entry else None
        return entry


class PropSpec(BaseModel):
    """A root attribute as it appears in the generated component."""

    model_config = ConfigDict(frozen=True)

    source_key: str = Field(..., description="Original attribute name")
    binding_name: str = Field(..., description="Identifier used in the generated script")
    default_value: str = Field(..., description="Default value (the original value)")
    exposed: bool = Field(
        default=True,
        description="False for attributes that are always inlined literally",
    )


class ConvertOptions(BaseModel):
    """Caller-tunable conversion policy."""

    model_config = ConfigDict(frozen=True)

    include_class: bool = Field(
        default=False,
        description="Expose the root class attribute as a className prop",
    )


class TraceEntry(BaseModel):
    """Record of one pass acting on a conversion."""

    id: str
    timestamp: datetime
    pass_name: str
    action: str
    before: Optional[str] = None
    after: Optional[str] = None
