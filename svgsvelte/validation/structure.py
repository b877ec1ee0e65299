"""
Structural Invariants

Rules every parsed tree must satisfy before generation:

ROOT_HAS_CHILDREN:
    The root carries at least one child element. A root with only
    attributes renders nothing worth a component.

TREE_NO_UNSUPPORTED_ELEMENTS:
    No element at any depth contains a nested <svg>, an <image> or a
    <style> child. The first one met in document (pre-)order is the
    one reported.

Checks run in the order listed; the first failure rejects the document.
"""

from typing import Optional

from svgsvelte.core.errors import ParseError
from svgsvelte.ir.enums import ParseErrorCode, UnsupportedElement
from svgsvelte.ir.schema import SvgNode
from svgsvelte.validation.invariants import (
    Invariant,
    InvariantRegistry,
    InvariantResult,
)


def _find_unsupported(node: SvgNode) -> Optional[UnsupportedElement]:
    for tag, child in node.iter_children():
        kind = UnsupportedElement.from_tag(tag)
        if kind is not None:
            return kind
        found = _find_unsupported(child)
        if found is not None:
            return found
    return None


def unsupported_message(kind: UnsupportedElement) -> str:
    label = kind.label
    return f"{label[0].upper()}{label[1:]} elements are not supported"


def check_root_has_children(tree: SvgNode) -> InvariantResult:
    """Check that the root has at least one child element."""
    if tree.children:
        return InvariantResult(
            passes=True,
            invariant_id="ROOT_HAS_CHILDREN",
            message=f"Root has {len(tree.iter_children())} child element(s)",
        )
    return InvariantResult(
        passes=False,
        invariant_id="ROOT_HAS_CHILDREN",
        message="SVG has no child elements",
    )


def check_no_unsupported_elements(tree: SvgNode) -> InvariantResult:
    """Check that no nested svg, image or style element appears anywhere."""
    kind = _find_unsupported(tree)
    if kind is None:
        return InvariantResult(
            passes=True,
            invariant_id="TREE_NO_UNSUPPORTED_ELEMENTS",
            message="No unsupported elements",
        )
    return InvariantResult(
        passes=False,
        invariant_id="TREE_NO_UNSUPPORTED_ELEMENTS",
        message=unsupported_message(kind),
        element=kind,
    )


ROOT_HAS_CHILDREN = Invariant(
    id="ROOT_HAS_CHILDREN",
    description="Root must contain at least one child element",
    code=ParseErrorCode.NO_CHILDREN,
    check_fn=check_root_has_children,
)

TREE_NO_UNSUPPORTED_ELEMENTS = Invariant(
    id="TREE_NO_UNSUPPORTED_ELEMENTS",
    description="No nested svg, image or style element at any depth",
    code=ParseErrorCode.UNSUPPORTED_ELEMENT,
    check_fn=check_no_unsupported_elements,
)

InvariantRegistry.register(ROOT_HAS_CHILDREN)
InvariantRegistry.register(TREE_NO_UNSUPPORTED_ELEMENTS)

# Check order matters for diagnostics
STRUCTURE_INVARIANTS = [
    ROOT_HAS_CHILDREN.id,
    TREE_NO_UNSUPPORTED_ELEMENTS.id,
]


def validate_tree(tree: SvgNode) -> SvgNode:
    """
    Reject trees that violate a structural invariant.

    Returns:
        The same tree, unchanged

    Raises:
        ParseError: For the first invariant that fails
    """
    for invariant_id in STRUCTURE_INVARIANTS:
        result = InvariantRegistry.check(invariant_id, tree)
        if not result.passes:
            raise ParseError(result.message, code=result.code, element=result.element)
    return tree
