"""Builder for converting an OpenAPISpecification to a ReferenceGraph."""

from typing import Any, Iterator

from ..errors import ReferenceNotFoundError
from ..resolver.ref_resolver import LITERAL_KEYWORDS, NAME_MAP_KEYWORDS, split_pointer
from ..schema.models import OpenAPISpecification
from .reference_graph import ReferenceGraph


def _iter_refs(node: Any, names: bool = False) -> Iterator[str]:
    """Yield every ``$ref`` string found inside a node."""
    if isinstance(node, list):
        for item in node:
            yield from _iter_refs(item)
    elif isinstance(node, dict):
        if names:
            for value in node.values():
                yield from _iter_refs(value)
            return
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield ref
        for key, value in node.items():
            if key != "$ref" and key not in LITERAL_KEYWORDS:
                yield from _iter_refs(value, names=key in NAME_MAP_KEYWORDS)


def _owner(ref: str) -> str:
    """Map a pointer to the component node that contains it.

    ``#/components/schemas/Pet/properties/id`` belongs to
    ``#/components/schemas/Pet``.
    """
    parts = ref.split("/")
    if len(parts) >= 4 and parts[1] == "components":
        return "/".join(parts[:4])
    return ref


def _exists(ref: str, document: dict) -> bool:
    try:
        segments = split_pointer(ref)
    except ReferenceNotFoundError:
        return False
    current: Any = document
    for segment in segments:
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            return False
    return current is not None


def build_reference_graph(spec: OpenAPISpecification) -> ReferenceGraph:
    """Build a ReferenceGraph from a loaded document.

    Args:
        spec: The loaded document.

    Returns:
        A ReferenceGraph with one node per component and operation.
    """
    graph = ReferenceGraph()
    document = spec.document

    # Add all components first
    components = document.get("components") or {}
    for section, entries in components.items():
        if not isinstance(entries, dict):
            continue
        for name in entries:
            graph.add_component(f"#/components/{section}/{name}", section, name)

    # Add operations
    for endpoint in spec.endpoints():
        graph.add_operation(endpoint.identifier, endpoint.path, endpoint.method)

    # Component references (after all nodes exist)
    for section, entries in components.items():
        if not isinstance(entries, dict):
            continue
        for name, body in entries.items():
            source = f"#/components/{section}/{name}"
            for ref in _iter_refs(body):
                exists = _exists(ref, document)
                graph.add_reference(source, _owner(ref) if exists else ref, missing=not exists)

    # Operation references, including path-level parameters
    for endpoint in spec.endpoints():
        for ref in _iter_refs([endpoint.operation, endpoint.path_parameters]):
            exists = _exists(ref, document)
            graph.add_reference(endpoint.identifier, _owner(ref) if exists else ref, missing=not exists)

    return graph
