"""Schema layer for loading and validating OpenAPI documents."""

from .errors import SpecLoadError, SpecValidationError
from .models import HTTP_METHODS, Endpoint, Info, OpenAPISpecification, SpecHeader
from .loader import load_document, parse_spec, parse_spec_from_string

__all__ = [
    "SpecLoadError",
    "SpecValidationError",
    "HTTP_METHODS",
    "Endpoint",
    "Info",
    "OpenAPISpecification",
    "SpecHeader",
    "load_document",
    "parse_spec",
    "parse_spec_from_string",
]
