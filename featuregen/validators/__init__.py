"""Reference validators for OpenAPI documents."""

from .base import Severity, ValidationIssue, ValidationResult
from .cycles import check_circular_references
from .orphan_detector import check_unused_components
from .reference_integrity import check_reference_integrity
from .runner import run_validators, validate_spec_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_circular_references",
    "check_unused_components",
    "check_reference_integrity",
    "run_validators",
    "validate_spec_file",
]
