"""
Invariant Infrastructure

Provides the foundation for structural validation:
- Invariant: A machine-checkable rule over a parsed tree
- InvariantResult: Outcome of checking an invariant
- InvariantRegistry: Central registry of all invariants
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from svgsvelte.ir.enums import ParseErrorCode, UnsupportedElement
from svgsvelte.ir.schema import SvgNode


@dataclass
class InvariantResult:
    """Result of checking an invariant."""

    passes: bool
    invariant_id: str
    message: str
    code: Optional[ParseErrorCode] = None
    element: Optional[UnsupportedElement] = None

    def __repr__(self) -> str:
        status = "PASS" if self.passes else "FAIL"
        return f"{status} [{self.invariant_id}] {self.message}"


@dataclass
class Invariant:
    """
    A machine-checkable rule that a parsed tree must pass.

    A failing invariant rejects the whole document with `code`.
    """

    id: str                                        # Unique identifier (e.g., "ROOT_HAS_CHILDREN")
    description: str                               # Human-readable description
    code: ParseErrorCode                           # Error code reported on failure
    check_fn: Callable[[SvgNode], InvariantResult]

    def check(self, tree: SvgNode) -> InvariantResult:
        """Check this invariant against a tree."""
        result = self.check_fn(tree)
        result.invariant_id = self.id
        if not result.passes and result.code is None:
            result.code = self.code
        return result


class InvariantRegistry:
    """
    Central registry of all invariants.

    Usage:
        InvariantRegistry.register(my_invariant)
        result = InvariantRegistry.check("ROOT_HAS_CHILDREN", tree)
        results = InvariantRegistry.check_all(tree, ["ROOT_HAS_CHILDREN", "TREE_NO_UNSUPPORTED_ELEMENTS"])
    """

    _invariants: dict[str, Invariant] = {}

    @classmethod
    def register(cls, invariant: Invariant) -> None:
        """Register an invariant."""
        cls._invariants[invariant.id] = invariant

    @classmethod
    def get(cls, invariant_id: str) -> Optional[Invariant]:
        """Get an invariant by ID."""
        return cls._invariants.get(invariant_id)

    @classmethod
    def check(cls, invariant_id: str, tree: SvgNode) -> InvariantResult:
        """Check a single invariant against a tree."""
        inv = cls._invariants.get(invariant_id)
        if not inv:
            return InvariantResult(
                passes=False,
                invariant_id=invariant_id,
                message=f"Unknown invariant: {invariant_id}",
            )
        return inv.check(tree)

    @classmethod
    def check_all(cls, tree: SvgNode, invariant_ids: List[str]) -> List[InvariantResult]:
        """Check multiple invariants against a tree."""
        return [cls.check(id, tree) for id in invariant_ids]

    @classmethod
    def list_all(cls) -> List[str]:
        """List all registered invariant IDs."""
        return list(cls._invariants.keys())
