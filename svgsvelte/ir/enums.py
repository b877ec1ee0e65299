"""
IR Enums — Element names, error codes, and statuses.

No stringly-typed constants scattered across passes.
"""

from enum import Enum


# ============================================================================
# Markup vocabulary
# ============================================================================

ROOT_TAG = "svg"
TITLE_TAG = "title"
DESCRIPTION_TAG = "desc"
CLASS_ATTRIBUTE = "class"
CLASS_BINDING = "className"


class UnsupportedElement(str, Enum):
    """
    Child element names rejected at any depth of the tree.

    Declaration order is the order in which the kinds are reported
    when a single node carries more than one of them.
    """

    NESTED_SVG = "svg"
    RASTER_IMAGE = "image"
    STYLESHEET = "style"

    @property
    def label(self) -> str:
        """Human-readable name used in error messages."""
        return {
            UnsupportedElement.NESTED_SVG: "nested SVG",
            UnsupportedElement.RASTER_IMAGE: "raster image",
            UnsupportedElement.STYLESHEET: "inline stylesheet",
        }[self]

    @classmethod
    def from_tag(cls, tag: str) -> "UnsupportedElement | None":
        """Map a child entry name to its reserved kind, if any."""
        try:
            return cls(tag)
        except ValueError:
            return None


class NonEditableAttribute(str, Enum):
    """Root attributes that are always inlined, never exposed as props."""

    VIEW_BOX = "viewBox"
    PRESERVE_ASPECT_RATIO = "preserveAspectRatio"

    @classmethod
    def names(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)


class AriaAttribute(str, Enum):
    """ARIA attributes synthesized from root text children."""

    LABEL = "aria-label"              # from <title>
    DESCRIPTION = "aria-description"  # from <desc>


# ============================================================================
# Errors and statuses
# ============================================================================

class ParseErrorCode(str, Enum):
    """Why a document was rejected by the parser, in check order."""

    MISSING_ROOT = "missing_root"
    SYNTAX = "syntax"
    NO_ROOT = "no_root"
    NO_CHILDREN = "no_children"
    UNSUPPORTED_ELEMENT = "unsupported_element"


class ConversionStatus(str, Enum):
    """Outcome of a single file conversion in batch mode."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
