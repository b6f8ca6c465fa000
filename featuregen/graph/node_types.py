"""Node and edge type definitions for the reference graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the reference graph."""

    COMPONENT = "component"  # #/components/<section>/<name>
    OPERATION = "operation"  # GET /items/{id}
    POINTER = "pointer"  # any other pointer target, or a missing one


class EdgeType(str, Enum):
    """Types of edges in the reference graph."""

    REFERENCES = "references"
