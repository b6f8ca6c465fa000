"""Circular reference validator."""

from ..graph.reference_graph import ReferenceGraph
from .base import ValidationResult


def check_circular_references(graph: ReferenceGraph) -> ValidationResult:
    """Report every reference cycle between components.

    A cycle makes any endpoint that reaches it unanalyzable, so each one is
    an error. The reported path repeats its first node to show where the
    cycle closes.

    Args:
        graph: The reference graph.

    Returns:
        ValidationResult with one error per cycle.
    """
    result = ValidationResult()

    for cycle in graph.cycles():
        path = cycle + [cycle[0]]
        result.add_error(
            code="CIRCULAR_REF",
            message=f"Circular reference: {' -> '.join(path)}",
            location=cycle[0],
            reference_path=path,
            circular_ref=cycle[0],
        )

    return result
