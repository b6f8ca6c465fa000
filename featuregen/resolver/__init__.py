"""Reference resolution for OpenAPI documents."""

from .ref_resolver import (
    LITERAL_KEYWORDS,
    NAME_MAP_KEYWORDS,
    ReferenceResolver,
    ResolutionCache,
    is_reference,
    split_pointer,
)

__all__ = [
    "LITERAL_KEYWORDS",
    "NAME_MAP_KEYWORDS",
    "ReferenceResolver",
    "ResolutionCache",
    "is_reference",
    "split_pointer",
]
