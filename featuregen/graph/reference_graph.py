"""ReferenceGraph wrapper around networkx for OpenAPI documents."""

from typing import Any, Iterator

import networkx as nx

from .node_types import EdgeType, NodeType


class ReferenceGraph:
    """A graph of which document nodes reference which.

    Wraps a networkx DiGraph whose nodes are component pointers and
    operation identifiers, with an edge for every ``$ref`` found inside a
    node.
    """

    def __init__(self):
        self._graph = nx.DiGraph()

    @property
    def graph(self) -> nx.DiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_component(self, pointer: str, section: str, name: str) -> str:
        self._graph.add_node(
            pointer,
            node_type=NodeType.COMPONENT,
            section=section,
            name=name,
            missing=False,
        )
        return pointer

    def add_operation(self, identifier: str, path: str, method: str) -> str:
        self._graph.add_node(
            identifier,
            node_type=NodeType.OPERATION,
            path=path,
            method=method,
            missing=False,
        )
        return identifier

    def add_reference(self, source: str, target: str, missing: bool = False) -> None:
        """Add a reference edge, creating a pointer node for unknown targets."""
        if not self._graph.has_node(target):
            self._graph.add_node(target, node_type=NodeType.POINTER, missing=missing)
        elif missing:
            self._graph.nodes[target]["missing"] = True
        self._graph.add_edge(source, target, edge_type=EdgeType.REFERENCES)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_node(self, node_id: str) -> dict[str, Any] | None:
        if not self._graph.has_node(node_id):
            return None
        return dict(self._graph.nodes[node_id])

    def iter_nodes(self, node_type: NodeType | None = None) -> Iterator[str]:
        for node_id, data in self._graph.nodes(data=True):
            if node_type is None or data.get("node_type") == node_type:
                yield node_id

    def get_components(self) -> list[str]:
        return list(self.iter_nodes(NodeType.COMPONENT))

    def get_operations(self) -> list[str]:
        return list(self.iter_nodes(NodeType.OPERATION))

    def references_from(self, node_id: str) -> list[str]:
        """Targets directly referenced by a node."""
        if not self._graph.has_node(node_id):
            return []
        return list(self._graph.successors(node_id))

    def referenced_by(self, node_id: str) -> list[str]:
        """Nodes that directly reference a node."""
        if not self._graph.has_node(node_id):
            return []
        return list(self._graph.predecessors(node_id))

    def missing_references(self) -> list[tuple[str, str]]:
        """All (source, target) edges whose target does not exist."""
        return [
            (source, target)
            for source, target in self._graph.edges()
            if self._graph.nodes[target].get("missing")
        ]

    def cycles(self) -> list[list[str]]:
        """Reference cycles, each rotated to start at its smallest node."""
        found = []
        for cycle in nx.simple_cycles(self._graph):
            start = cycle.index(min(cycle))
            found.append(cycle[start:] + cycle[:start])
        found.sort(key=lambda c: (len(c), c))
        return found

    def reachable_from_operations(self) -> set[str]:
        reachable: set[str] = set()
        for operation in self.get_operations():
            reachable |= nx.descendants(self._graph, operation)
        return reachable

    def unused_components(self, exclude_sections: tuple[str, ...] = ("securitySchemes",)) -> list[str]:
        """Components no operation reaches, directly or transitively."""
        reachable = self.reachable_from_operations()
        return [
            node_id
            for node_id in self.get_components()
            if node_id not in reachable
            and self._graph.nodes[node_id].get("section") not in exclude_sections
        ]
