"""Resolution of ``$ref`` pointers inside a loaded document."""

import copy
import logging
from typing import Any
from urllib.parse import unquote

from ..errors import CircularReferenceError, ReferenceNotFoundError
from ..schema.models import OpenAPISpecification

logger = logging.getLogger(__name__)

# Keywords whose values are literal data, never schemas.
LITERAL_KEYWORDS = frozenset({"example", "examples", "default", "enum", "const"})

# Keywords whose values map free-form names to nodes. A key inside one of
# these is a name, so a property called "default" is still a schema.
NAME_MAP_KEYWORDS = frozenset(
    {
        "properties",
        "patternProperties",
        "$defs",
        "definitions",
        "dependentSchemas",
        "responses",
        "links",
        "callbacks",
        "headers",
    }
)


def is_reference(obj: Any) -> bool:
    """Check whether an object is a reference object."""
    return isinstance(obj, dict) and "$ref" in obj


def split_pointer(ref: str) -> list[str]:
    """Split a local reference into unescaped JSON-pointer segments.

    Raises:
        ReferenceNotFoundError: If the reference is not a local pointer.
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        raise ReferenceNotFoundError(str(ref), "only local references starting with '#/' are supported")
    return [
        unquote(segment).replace("~1", "/").replace("~0", "~")
        for segment in ref[2:].split("/")
    ]


class ResolutionCache:
    """Resolved schemas keyed by reference string, for one document.

    Entries are insert-once: a reference resolves to the same structure for
    as long as the document it came from is in use.
    """

    def __init__(self):
        self._entries: dict[str, Any] = {}

    def __contains__(self, ref: str) -> bool:
        return ref in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, ref: str) -> Any:
        return self._entries.get(ref)

    def put(self, ref: str, value: Any) -> None:
        self._entries.setdefault(ref, value)

    def clear(self) -> None:
        self._entries.clear()


class ReferenceResolver:
    """Resolve references to concrete, reference-free structures.

    The resolver keeps an explicit stack of the references currently being
    expanded. A reference that reappears on its own stack is a cycle; the
    same target reached through two unrelated branches is not.

    One resolver serves one document at a time: call :meth:`clear_cache`
    before using it with a different document.
    """

    def __init__(self, cache: ResolutionCache | None = None):
        self._cache = cache if cache is not None else ResolutionCache()
        self._chain: list[str] = []

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    def resolve(self, ref: str, spec: OpenAPISpecification) -> Any:
        """Return the fully expanded object a reference points at.

        Raises:
            ReferenceNotFoundError: If the pointer does not exist.
            CircularReferenceError: If the reference chain loops.
        """
        self._chain = []
        return copy.deepcopy(self._resolve_ref(ref, spec.document))

    def resolve_schema(self, schema: Any, spec: OpenAPISpecification) -> Any:
        """Expand a schema or reference until no reference remains.

        Raises:
            ReferenceNotFoundError: If any nested pointer does not exist.
            CircularReferenceError: If any nested reference chain loops.
        """
        self._chain = []
        return copy.deepcopy(self._expand(schema, spec.document))

    def has_been_resolved(self, ref: str) -> bool:
        """Check whether a reference has a cached resolution."""
        return ref in self._cache

    def clear_cache(self) -> None:
        """Forget every cached resolution."""
        logger.debug("Clearing %d cached reference(s)", len(self._cache))
        self._cache.clear()
        self._chain = []

    def _resolve_ref(self, ref: str, document: dict) -> Any:
        if ref in self._cache:
            return self._cache.get(ref)

        if ref in self._chain:
            path = self._chain + [ref]
            logger.warning("Circular reference: %s", " -> ".join(path))
            raise CircularReferenceError(path, ref)

        self._chain.append(ref)
        try:
            target = self._lookup(ref, document)
            resolved = self._expand(target, document)
        finally:
            self._chain.pop()

        self._cache.put(ref, resolved)
        return resolved

    def _lookup(self, ref: str, document: dict) -> Any:
        current: Any = document
        for segment in split_pointer(ref):
            if isinstance(current, dict) and segment in current:
                current = current[segment]
            elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
                current = current[int(segment)]
            else:
                raise ReferenceNotFoundError(ref, f"path not found at segment '{segment}'")
        if current is None:
            raise ReferenceNotFoundError(ref, "reference resolved to null")
        return current

    def _expand(self, node: Any, document: dict, names: bool = False) -> Any:
        if isinstance(node, list):
            return [self._expand(item, document) for item in node]
        if not isinstance(node, dict):
            return node

        if names:
            return {key: self._expand(value, document) for key, value in node.items()}

        if is_reference(node):
            resolved = self._resolve_ref(node["$ref"], document)
            siblings = {k: v for k, v in node.items() if k != "$ref"}
            if not siblings or not isinstance(resolved, dict):
                return resolved
            merged = dict(resolved)
            for key, value in siblings.items():
                merged[key] = self._expand_member(key, value, document)
            return merged

        return {key: self._expand_member(key, value, document) for key, value in node.items()}

    def _expand_member(self, key: str, value: Any, document: dict) -> Any:
        if key in LITERAL_KEYWORDS:
            return value
        return self._expand(value, document, names=key in NAME_MAP_KEYWORDS)
