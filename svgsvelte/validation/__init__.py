"""
Validation Module

Structural invariants a parsed tree must pass before generation.
A tree that fails any invariant is rejected with a ParseError.
"""

from svgsvelte.validation.invariants import (
    Invariant,
    InvariantRegistry,
    InvariantResult,
)
from svgsvelte.validation.structure import (
    STRUCTURE_INVARIANTS,
    check_no_unsupported_elements,
    check_root_has_children,
    validate_tree,
)

__all__ = [
    # Core infrastructure
    "Invariant",
    "InvariantRegistry",
    "InvariantResult",
    # Structure
    "STRUCTURE_INVARIANTS",
    "check_no_unsupported_elements",
    "check_root_has_children",
    "validate_tree",
]
