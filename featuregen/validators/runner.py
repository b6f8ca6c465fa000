"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..graph.builder import build_reference_graph
from ..schema.loader import parse_spec
from ..schema.models import OpenAPISpecification
from .base import ValidationResult
from .cycles import check_circular_references
from .orphan_detector import check_unused_components
from .reference_integrity import check_reference_integrity


def run_validators(spec: OpenAPISpecification) -> ValidationResult:
    """Run all reference validators on a document.

    Args:
        spec: The loaded document.

    Returns:
        Combined ValidationResult from all validators.
    """
    graph = build_reference_graph(spec)
    result = ValidationResult()

    # Dangling references first (most fundamental)
    result.merge(check_reference_integrity(graph))
    result.merge(check_circular_references(graph))
    result.merge(check_unused_components(graph))

    return result


def validate_spec_file(path: str | Path) -> ValidationResult:
    """Load and validate a document file.

    Raises:
        SpecLoadError: If the file cannot be loaded.
        SpecValidationError: If the document header is invalid.
    """
    spec = parse_spec(path)
    return run_validators(spec)
