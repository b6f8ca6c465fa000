"""Reference integrity validator."""

from ..graph.reference_graph import ReferenceGraph
from .base import ValidationResult


def check_reference_integrity(graph: ReferenceGraph) -> ValidationResult:
    """Check that every ``$ref`` points at an existing node.

    Args:
        graph: The reference graph.

    Returns:
        ValidationResult with one error per dangling reference.
    """
    result = ValidationResult()

    for source, target in graph.missing_references():
        result.add_error(
            code="UNRESOLVED_REF",
            message=f"Reference '{target}' does not resolve to any node",
            location=source,
            reference=target,
        )

    return result
