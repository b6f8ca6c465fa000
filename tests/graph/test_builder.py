"""Tests for building reference graphs from documents."""

from featuregen.graph.builder import build_reference_graph
from featuregen.graph.node_types import NodeType
from featuregen.schema.models import OpenAPISpecification


class TestBuildReferenceGraph:
    def test_component_and_operation_nodes(self, petstore_spec):
        graph = build_reference_graph(petstore_spec)

        components = graph.get_components()
        assert "#/components/schemas/Pet" in components
        assert "#/components/parameters/TagFilter" in components
        assert "#/components/securitySchemes/bearerAuth" in components
        assert graph.get_operations() == [
            "GET /pets",
            "POST /pets",
            "GET /pets/{petId}",
            "DELETE /pets/{petId}",
            "GET /health",
        ]

    def test_node_attributes(self, petstore_spec):
        graph = build_reference_graph(petstore_spec)

        node = graph.get_node("#/components/schemas/Pet")
        assert node["node_type"] == NodeType.COMPONENT
        assert node["section"] == "schemas"
        assert node["name"] == "Pet"
        assert graph.get_node("GET /pets")["method"] == "GET"
        assert graph.get_node("nothing") is None

    def test_operation_references(self, petstore_spec):
        graph = build_reference_graph(petstore_spec)

        assert set(graph.references_from("GET /pets")) == {
            "#/components/parameters/TagFilter",
            "#/components/schemas/Pet",
        }
        assert set(graph.references_from("POST /pets")) == {
            "#/components/schemas/NewPet",
            "#/components/schemas/Pet",
            "#/components/schemas/Error",
        }

    def test_component_references(self, petstore_spec):
        graph = build_reference_graph(petstore_spec)

        assert graph.references_from("#/components/schemas/Pet") == ["#/components/schemas/NewPet"]
        assert "#/components/schemas/Pet" in graph.referenced_by("#/components/schemas/NewPet")

    def test_deep_pointer_maps_to_owning_component(self):
        spec = OpenAPISpecification(
            document={
                "components": {
                    "schemas": {
                        "Pet": {"properties": {"id": {"type": "integer"}}},
                        "Ref": {"$ref": "#/components/schemas/Pet/properties/id"},
                    }
                }
            }
        )

        graph = build_reference_graph(spec)

        assert graph.references_from("#/components/schemas/Ref") == ["#/components/schemas/Pet"]

    def test_dangling_reference(self):
        spec = OpenAPISpecification(
            document={
                "paths": {
                    "/a": {
                        "get": {
                            "responses": {
                                "200": {
                                    "description": "ok",
                                    "content": {
                                        "application/json": {
                                            "schema": {"$ref": "#/components/schemas/Ghost"}
                                        }
                                    },
                                }
                            }
                        }
                    }
                }
            }
        )

        graph = build_reference_graph(spec)

        assert graph.missing_references() == [("GET /a", "#/components/schemas/Ghost")]
        assert graph.get_node("#/components/schemas/Ghost")["node_type"] == NodeType.POINTER

    def test_cycle_detected(self, cyclic_spec):
        graph = build_reference_graph(cyclic_spec)

        assert graph.cycles() == [["#/components/schemas/A", "#/components/schemas/B"]]

    def test_self_reference_cycle(self):
        spec = OpenAPISpecification(
            document={
                "components": {
                    "schemas": {
                        "Node": {"properties": {"next": {"$ref": "#/components/schemas/Node"}}}
                    }
                }
            }
        )

        graph = build_reference_graph(spec)

        assert graph.cycles() == [["#/components/schemas/Node"]]

    def test_unused_components(self, petstore_spec):
        graph = build_reference_graph(petstore_spec)

        # Reachable transitively (Pet -> NewPet) counts as used; security
        # schemes are referenced by name and never reported.
        assert graph.unused_components() == ["#/components/schemas/Unused"]

    def test_property_named_default_counts_as_a_reference(self):
        spec = OpenAPISpecification(
            document={
                "components": {
                    "schemas": {
                        "Value": {"type": "string"},
                        "Setting": {
                            "properties": {"default": {"$ref": "#/components/schemas/Value"}},
                        },
                    }
                }
            }
        )

        graph = build_reference_graph(spec)

        assert graph.references_from("#/components/schemas/Setting") == ["#/components/schemas/Value"]

    def test_diamond_has_no_cycles(self, diamond_spec):
        assert build_reference_graph(diamond_spec).cycles() == []
