"""Structured errors raised by featuregen.

Every error carries a ``kind`` discriminator plus a kind-specific ``details``
payload, so callers (and the CLI) can tell a cyclic schema apart from an
unknown scenario type without parsing messages.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminator for every error featuregen raises."""

    REFERENCE_NOT_FOUND = "reference_not_found"
    CIRCULAR_REFERENCE = "circular_reference"
    INVALID_SCENARIO_TYPE = "invalid_scenario_type"
    GENERATOR_NOT_REGISTERED = "generator_not_registered"
    UNSUPPORTED_FORMAT = "serialization_unsupported_format"
    SPEC_LOAD = "spec_load"
    SPEC_VALIDATION = "spec_validation"
    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    CONFIG_INVALID = "config_invalid"


class FeatureGenError(Exception):
    """Base error: a kind, a message and structured diagnostic fields."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str, **details: Any):
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a plain mapping."""
        return {"kind": self.kind.value, "message": self.message, **self.details}


class ReferenceNotFoundError(FeatureGenError):
    """Raised when a ``$ref`` pointer does not resolve to a node."""

    def __init__(self, reference: str, reason: str):
        super().__init__(
            ErrorKind.REFERENCE_NOT_FOUND,
            f"Reference not found: {reference} ({reason})",
            reference=reference,
            reason=reason,
        )
        self.reference = reference
        self.reason = reason


class CircularReferenceError(FeatureGenError):
    """Raised when a reference reappears in its own resolution chain."""

    def __init__(self, reference_path: list[str], circular_ref: str):
        super().__init__(
            ErrorKind.CIRCULAR_REFERENCE,
            f"Circular reference detected: {' -> '.join(reference_path)}",
            reference_path=list(reference_path),
            circular_ref=circular_ref,
        )
        self.reference_path = list(reference_path)
        self.circular_ref = circular_ref


class InvalidScenarioTypeError(FeatureGenError):
    """Raised for a scenario type outside the fixed vocabulary."""

    def __init__(self, value: Any, allowed: list[str]):
        super().__init__(
            ErrorKind.INVALID_SCENARIO_TYPE,
            f"Invalid scenario type: {value!r} (expected one of: {', '.join(allowed)})",
            value=value,
            allowed=list(allowed),
        )
        self.value = value


class GeneratorNotRegisteredError(FeatureGenError):
    """Raised when no generator is registered for a scenario type."""

    def __init__(self, scenario_type: str):
        super().__init__(
            ErrorKind.GENERATOR_NOT_REGISTERED,
            f"No generator registered for scenario type: {scenario_type}",
            scenario_type=scenario_type,
        )
        self.scenario_type = scenario_type


class UnsupportedFormatError(FeatureGenError):
    """Raised when a feature is serialized to an unknown format."""

    def __init__(self, format: Any, supported: list[str]):
        super().__init__(
            ErrorKind.UNSUPPORTED_FORMAT,
            f"Unsupported output format: {format!r} (supported: {', '.join(supported)})",
            format=format,
            supported=list(supported),
        )
        self.format = format


class EndpointNotFoundError(FeatureGenError):
    """Raised when a path/method pair is not in the loaded document."""

    def __init__(self, path: str, method: str):
        super().__init__(
            ErrorKind.ENDPOINT_NOT_FOUND,
            f"Endpoint not found: {method.upper()} {path}",
            path=path,
            method=method.upper(),
        )
        self.path = path
        self.method = method.upper()


class ConfigError(FeatureGenError):
    """Raised when a settings file cannot be loaded or validated."""

    def __init__(self, message: str, path: str | None = None, errors: list[dict] | None = None):
        super().__init__(
            ErrorKind.CONFIG_INVALID, message, path=path, errors=errors or []
        )
        self.path = path
        self.errors = errors or []
