"""Tests for the scenario generators."""

import json

import pytest

from featuregen.analysis.models import EndpointAnalysis
from featuregen.generators.all_fields import AllFieldsGenerator
from featuregen.generators.auth_error import AuthErrorGenerator, describe_carrier
from featuregen.generators.base import collect_fields
from featuregen.generators.edge_case import EdgeCaseGenerator
from featuregen.generators.models import ScenarioType, StepKeyword
from featuregen.generators.not_found import NotFoundGenerator, looks_like_identifier
from featuregen.generators.required_fields import RequiredFieldsGenerator
from featuregen.generators.validation_error import ValidationErrorGenerator
from featuregen.schema.loader import parse_spec_from_string


def sent_fields(scenario) -> dict[str, object]:
    """Field name -> decoded value from the scenario's request table."""
    for step in scenario.steps:
        if step.keyword == StepKeyword.WHEN:
            if step.data_table is None:
                return {}
            return {row[0]: json.loads(row[2]) for row in step.data_table.rows}
    raise AssertionError("scenario has no When step")


def texts(scenario) -> list[str]:
    return [f"{s.keyword.value} {s.text}" for s in scenario.steps]


THREE_PARAMS_YAML = """
openapi: 3.0.0
info: {title: Search, version: "1"}
paths:
  /search:
    get:
      parameters:
        - {name: q, in: query, required: true, schema: {type: string}}
        - {name: page, in: query, required: true, schema: {type: integer, minimum: 1}}
        - {name: sort, in: query, schema: {type: string, enum: [asc, desc]}}
      responses:
        "200": {description: ok}
"""


@pytest.fixture
def search_analysis(analyze):
    return analyze(parse_spec_from_string(THREE_PARAMS_YAML), "/search", "GET")


@pytest.fixture
def create_pet(petstore_spec, analyze) -> EndpointAnalysis:
    return analyze(petstore_spec, "/pets", "POST")


@pytest.fixture
def get_item(items_spec, analyze) -> EndpointAnalysis:
    return analyze(items_spec, "/items/{id}", "GET")


class TestCollectFields:
    def test_parameters_then_body_properties(self, create_pet):
        fields = collect_fields(create_pet)

        assert [(f.name, f.location, f.required) for f in fields] == [
            ("name", "body", True),
            ("age", "body", False),
            ("status", "body", False),
            ("tags", "body", False),
        ]

    def test_body_without_properties(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.0.0
info: {title: T, version: "1"}
paths:
  /raw:
    put:
      requestBody:
        required: true
        content:
          text/plain:
            schema: {type: string}
      responses:
        "204": {description: ok}
"""
        )

        fields = collect_fields(analyze(spec, "/raw", "PUT"))

        assert [(f.name, f.location, f.required) for f in fields] == [("body", "body", True)]


class TestRequiredFields:
    def test_only_required_parameters(self, search_analysis):
        scenarios = RequiredFieldsGenerator().generate(search_analysis)

        assert len(scenarios) == 1
        assert sent_fields(scenarios[0]) == {"q": "a", "page": 1}

    def test_minimal_body(self, create_pet):
        (scenario,) = RequiredFieldsGenerator().generate(create_pet)

        assert sent_fields(scenario) == {"name": "a"}
        assert scenario.tags == ("@positive", "@required-fields")
        assert texts(scenario) == [
            "Given the API is available",
            'And I am authenticated with "bearerAuth"',
            'When I send a POST request to "/pets" with:',
            "Then the response status should be 201",
            'And the response body should match the "201" response schema',
        ]

    def test_no_fields_sent(self, petstore_spec, analyze):
        (scenario,) = RequiredFieldsGenerator().generate(analyze(petstore_spec, "/health", "GET"))

        assert texts(scenario) == [
            "Given the API is available",
            'When I send a GET request to "/health"',
            "Then the response status should be 200",
        ]

    def test_table_layout(self, get_item):
        (scenario,) = RequiredFieldsGenerator().generate(get_item)
        table = scenario.steps[2].data_table

        assert table.headers == ("field", "in", "value")
        assert table.rows == (("id", "path", '"a"'),)


class TestAllFields:
    def test_every_parameter(self, search_analysis):
        (scenario,) = AllFieldsGenerator().generate(search_analysis)

        assert sent_fields(scenario) == {"q": "sample_q", "page": 1, "sort": "asc"}

    def test_body_with_echo_assertions(self, create_pet):
        (scenario,) = AllFieldsGenerator().generate(create_pet)

        assert sent_fields(scenario) == {
            "name": "sample_name",
            "age": 15,
            "status": "available",
            "tags": ["sample_tags"],
        }
        assert texts(scenario)[-3:] == [
            'And the response field "age" should be 15',
            'And the response field "status" should be "available"',
            'And the response field "tags" should be ["sample_tags"]',
        ]

    def test_declared_examples_are_sent(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.0.0
info: {title: Orders, version: "1"}
paths:
  /orders:
    post:
      parameters:
        - name: X-Request-Id
          in: header
          schema: {type: string}
          examples:
            trace: {$ref: "#/components/examples/RequestId"}
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              required: [sku]
              properties:
                sku: {type: string}
                quantity: {type: integer, minimum: 1}
            example: {sku: ABC-1}
      responses:
        "201": {description: created}
components:
  examples:
    RequestId: {value: req-42}
"""
        )

        (scenario,) = AllFieldsGenerator().generate(analyze(spec, "/orders", "POST"))

        assert sent_fields(scenario) == {"X-Request-Id": "req-42", "sku": "ABC-1", "quantity": 1}


class TestValidationError:
    def test_one_scenario_per_violation_in_field_order(self, create_pet):
        scenarios = ValidationErrorGenerator().generate(create_pet)

        assert [s.name for s in scenarios] == [
            'Missing required field "name"',
            'Invalid type for "name"',
            '"name" shorter than 1 character(s)',
            '"name" longer than 50 character(s)',
            'Invalid type for "age"',
            '"age" below minimum 0',
            '"age" above maximum 30',
            'Invalid type for "status"',
            '"status" outside allowed values',
            'Invalid type for "tags"',
            '"tags" with more than 5 item(s)',
        ]
        assert all(s.tags == ("@negative", "@validation") for s in scenarios)

    def test_each_scenario_breaks_one_field(self, create_pet):
        scenarios = ValidationErrorGenerator().generate(create_pet)

        assert sent_fields(scenarios[0]) == {}
        assert sent_fields(scenarios[1]) == {"name": 123}
        assert sent_fields(scenarios[5]) == {"name": "a", "age": -1}
        assert sent_fields(scenarios[8]) == {"name": "a", "status": "not_an_allowed_value"}
        assert sent_fields(scenarios[10]) == {"name": "a", "tags": ["a"] * 6}

    def test_expects_declared_validation_status(self, create_pet):
        scenarios = ValidationErrorGenerator().generate(create_pet)

        assert texts(scenarios[0])[-1] == "Then the response status should be 422"

    def test_falls_back_to_400(self, search_analysis):
        scenarios = ValidationErrorGenerator().generate(search_analysis)

        assert texts(scenarios[0])[-1] == "Then the response status should be 400"
        assert [s.name for s in scenarios] == [
            'Missing required field "q"',
            'Missing required field "page"',
            'Invalid type for "page"',
            '"page" below minimum 1',
            '"sort" outside allowed values',
        ]

    def test_pattern_violation(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.0.0
info: {title: T, version: "1"}
paths:
  /codes/{code}:
    get:
      parameters:
        - name: code
          in: path
          required: true
          schema: {type: string, pattern: "^[A-Z]{3}$"}
      responses:
        "200": {description: ok}
"""
        )

        scenarios = ValidationErrorGenerator().generate(analyze(spec, "/codes/{code}", "GET"))

        assert [s.name for s in scenarios] == ['"code" not matching pattern']
        assert sent_fields(scenarios[0]) == {"code": ""}

    def test_nothing_to_violate(self, get_item):
        generator = ValidationErrorGenerator()

        assert generator.can_generate(get_item) is False
        assert generator.generate(get_item) == []


class TestAuthError:
    def test_outline_per_scheme(self, get_item):
        scenarios = AuthErrorGenerator().generate(get_item)

        assert len(scenarios) == 1
        scenario = scenarios[0]
        assert scenario.is_outline
        assert scenario.examples.headers == ("credentials",)
        assert scenario.examples.rows == (("missing",), ("invalid",))
        assert texts(scenario) == [
            "Given the API is available",
            'And the API key in header "X-API-Key" is <credentials>',
            'When I send a GET request to "/items/{id}" with:',
            "Then the response status should be 401",
        ]

    def test_no_security_skips(self, petstore_spec, analyze):
        analysis = analyze(petstore_spec, "/health", "GET")
        generator = AuthErrorGenerator()

        assert generator.can_generate(analysis) is False
        assert generator.generate(analysis) == []

    def test_combined_requirement_keeps_other_scheme(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.0.0
info: {title: T, version: "1"}
paths:
  /secure:
    get:
      security:
        - {ApiKey: [], Bearer: []}
      responses:
        "200": {description: ok}
        "403": {description: forbidden}
components:
  securitySchemes:
    ApiKey: {type: apiKey, in: query, name: key}
    Bearer: {type: http, scheme: bearer}
"""
        )

        scenarios = AuthErrorGenerator().generate(analyze(spec, "/secure", "GET"))

        assert [s.name for s in scenarios] == [
            'Request with <credentials> credentials for "ApiKey"',
            'Request with <credentials> credentials for "Bearer"',
        ]
        assert texts(scenarios[0])[1:3] == [
            'And I am authenticated with "Bearer"',
            'And the API key in query "key" is <credentials>',
        ]
        assert texts(scenarios[1])[-1] == "Then the response status should be 403"

    @pytest.mark.parametrize(
        "scheme, expected",
        [
            ({"type": "apiKey", "in": "cookie", "name": "sid"}, 'API key in cookie "sid"'),
            ({"type": "http", "scheme": "Bearer"}, "bearer token"),
            ({"type": "http", "scheme": "basic"}, "basic credentials"),
            ({"type": "http", "scheme": "digest"}, "digest credentials"),
            ({"type": "oauth2"}, "OAuth2 access token"),
            ({"type": "openIdConnect"}, "OpenID Connect access token"),
            ({}, 'credentials for "x"'),
        ],
    )
    def test_describe_carrier(self, scheme, expected):
        assert describe_carrier("x", scheme) == expected


class TestNotFound:
    @pytest.mark.parametrize("name", ["id", "petId", "order_id", "uuid", "slug", "code", "KEY"])
    def test_identifier_names(self, name):
        assert looks_like_identifier(name)

    @pytest.mark.parametrize("name", ["paid", "name", "version", "ident"])
    def test_non_identifier_names(self, name):
        assert not looks_like_identifier(name)

    def test_substitutes_nonexistent_string_id(self, get_item):
        (scenario,) = NotFoundGenerator().generate(get_item)

        assert scenario.name == 'Resource not found for non-existent "id"'
        assert sent_fields(scenario) == {"id": "nonexistent-id"}
        assert texts(scenario)[-1] == "Then the response status should be 404"
        assert texts(scenario)[1] == 'And I am authenticated with "ApiKey"'

    def test_integer_id(self, petstore_spec, analyze):
        (scenario,) = NotFoundGenerator().generate(analyze(petstore_spec, "/pets/{petId}", "GET"))

        assert sent_fields(scenario) == {"petId": 999999999}

    def test_right_most_identifier(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.0.0
info: {title: T, version: "1"}
paths:
  /users/{userId}/posts/{postId}/{format}:
    get:
      parameters:
        - {name: userId, in: path, required: true, schema: {type: integer}}
        - {name: postId, in: path, required: true, schema: {type: integer}}
        - {name: format, in: path, required: true, schema: {type: string}}
      responses:
        "200": {description: ok}
"""
        )

        (scenario,) = NotFoundGenerator().generate(
            analyze(spec, "/users/{userId}/posts/{postId}/{format}", "GET")
        )

        assert sent_fields(scenario) == {"userId": 1, "postId": 999999999, "format": "a"}

    def test_no_path_parameter_skips(self, create_pet):
        generator = NotFoundGenerator()

        assert generator.can_generate(create_pet) is False
        assert generator.generate(create_pet) == []


class TestEdgeCase:
    def test_boundaries_in_order(self, create_pet):
        scenarios = EdgeCaseGenerator().generate(create_pet)

        assert [s.name for s in scenarios] == [
            '"name" at minimum length 1',
            '"name" at maximum length 50',
            '"age" at minimum 0',
            '"age" at maximum 30',
            'Empty "status"',
            'Absent "status"',
            '"tags" with maximum 5 item(s)',
            'Empty "tags"',
            'Absent "tags"',
        ]

    def test_exact_bounds_expect_success(self, create_pet):
        scenarios = EdgeCaseGenerator().generate(create_pet)

        assert sent_fields(scenarios[1]) == {"name": "a" * 50}
        assert sent_fields(scenarios[2]) == {"name": "a", "age": 0}
        assert texts(scenarios[1])[-1] == "Then the response status should be 201"

    def test_empty_versus_absent(self, create_pet):
        scenarios = EdgeCaseGenerator().generate(create_pet)
        empty, absent = scenarios[4], scenarios[5]

        assert sent_fields(empty) == {"name": "a", "status": ""}
        assert texts(empty)[-1] == "Then the response should not be a server error"
        assert sent_fields(absent) == {"name": "a"}
        assert texts(absent)[-1] == "Then the response status should be 201"

    def test_exclusive_bounds_stay_inside(self, analyze):
        spec = parse_spec_from_string(
            """
openapi: 3.1.0
info: {title: T, version: "1"}
paths:
  /range:
    get:
      parameters:
        - {name: n, in: query, required: true, schema: {type: integer, exclusiveMinimum: 0, exclusiveMaximum: 10}}
      responses:
        "200": {description: ok}
"""
        )

        scenarios = EdgeCaseGenerator().generate(analyze(spec, "/range", "GET"))

        assert [sent_fields(s)["n"] for s in scenarios] == [1, 9]

    @pytest.mark.parametrize(
        "schema, expected",
        [
            ("{type: number, exclusiveMinimum: 0, exclusiveMaximum: 1}", [0.5, 0.5]),
            ("{type: integer, minimum: 1.5, maximum: 9.5}", [2, 9]),
        ],
    )
    def test_bounds_match_the_declared_type(self, analyze, schema, expected):
        spec = parse_spec_from_string(
            f"""
openapi: 3.1.0
info: {{title: T, version: "1"}}
paths:
  /range:
    get:
      parameters:
        - {{name: n, in: query, required: true, schema: {schema}}}
      responses:
        "200": {{description: ok}}
"""
        )

        scenarios = EdgeCaseGenerator().generate(analyze(spec, "/range", "GET"))

        assert [sent_fields(s)["n"] for s in scenarios] == expected

    def test_no_boundaries_to_test(self, get_item):
        generator = EdgeCaseGenerator()

        assert generator.can_generate(get_item) is False
        assert generator.generate(get_item) == []


class TestGeneratorContract:
    @pytest.mark.parametrize(
        "generator, scenario_type",
        [
            (RequiredFieldsGenerator(), ScenarioType.REQUIRED_FIELDS),
            (AllFieldsGenerator(), ScenarioType.ALL_FIELDS),
            (ValidationErrorGenerator(), ScenarioType.VALIDATION_ERROR),
            (AuthErrorGenerator(), ScenarioType.AUTH_ERROR),
            (NotFoundGenerator(), ScenarioType.NOT_FOUND),
            (EdgeCaseGenerator(), ScenarioType.EDGE_CASE),
        ],
    )
    def test_get_type(self, generator, scenario_type):
        assert generator.get_type() is scenario_type

    def test_deterministic(self, create_pet):
        for generator in (ValidationErrorGenerator(), EdgeCaseGenerator(), AllFieldsGenerator()):
            assert generator.generate(create_pet) == generator.generate(create_pet)

    def test_scenarios_carry_their_type(self, create_pet):
        for scenario in ValidationErrorGenerator().generate(create_pet):
            assert scenario.scenario_type is ScenarioType.VALIDATION_ERROR
