"""Reference graph over a whole OpenAPI document."""

from .builder import build_reference_graph
from .node_types import EdgeType, NodeType
from .reference_graph import ReferenceGraph

__all__ = ["build_reference_graph", "EdgeType", "NodeType", "ReferenceGraph"]
