"""Unused component detection."""

from ..graph.reference_graph import ReferenceGraph
from .base import ValidationResult


def check_unused_components(graph: ReferenceGraph) -> ValidationResult:
    """Check for components that no operation reaches.

    Security schemes are referenced by name rather than by ``$ref`` and are
    never reported.

    Args:
        graph: The reference graph.

    Returns:
        ValidationResult with warnings for unused components.
    """
    result = ValidationResult()

    for pointer in graph.unused_components():
        result.add_warning(
            code="UNUSED_COMPONENT",
            message=f"Component '{pointer}' is not used by any operation",
            location=pointer,
        )

    return result
