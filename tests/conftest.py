"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from featuregen.analysis.analyzer import EndpointAnalyzer
from featuregen.schema.loader import parse_spec_from_string


ITEMS_YAML = """
openapi: 3.0.0
info:
  title: Items API
  version: "1.0"
paths:
  /items/{id}:
    get:
      operationId: getItem
      summary: Fetch one item
      parameters:
        - name: id
          in: path
          required: true
          schema:
            type: string
      security:
        - ApiKey: []
      responses:
        "200":
          description: Found
        "404":
          description: Not found
components:
  securitySchemes:
    ApiKey:
      type: apiKey
      in: header
      name: X-API-Key
"""


PETSTORE_YAML = """
openapi: 3.0.3
info:
  title: Petstore
  version: 1.0.0
security:
  - bearerAuth: []
paths:
  /pets:
    get:
      operationId: listPets
      summary: List pets
      tags: [pets]
      parameters:
        - name: limit
          in: query
          schema:
            type: integer
            minimum: 1
            maximum: 100
        - $ref: "#/components/parameters/TagFilter"
      responses:
        "200":
          description: A list of pets
          content:
            application/json:
              schema:
                type: array
                items:
                  $ref: "#/components/schemas/Pet"
    post:
      operationId: createPet
      summary: Create a pet
      tags: [pets]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: "#/components/schemas/NewPet"
      responses:
        "201":
          description: Created
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Pet"
        "422":
          description: Invalid input
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Error"
        "401":
          description: Unauthorized
  /pets/{petId}:
    parameters:
      - name: petId
        in: path
        required: true
        schema:
          type: integer
          format: int64
    get:
      operationId: getPet
      tags: [pets]
      responses:
        "200":
          description: A pet
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Pet"
        "404":
          description: Not found
    delete:
      operationId: deletePet
      tags: [admin]
      security: []
      responses:
        "204":
          description: Deleted
  /health:
    get:
      operationId: health
      security: []
      responses:
        "200":
          description: OK
components:
  parameters:
    TagFilter:
      name: tag
      in: query
      schema:
        type: string
  schemas:
    NewPet:
      type: object
      required: [name]
      properties:
        name:
          type: string
          minLength: 1
          maxLength: 50
        age:
          type: integer
          minimum: 0
          maximum: 30
        status:
          type: string
          enum: [available, pending, sold]
        tags:
          type: array
          maxItems: 5
          items:
            type: string
    Pet:
      allOf:
        - $ref: "#/components/schemas/NewPet"
        - type: object
          required: [id]
          properties:
            id:
              type: integer
              format: int64
              readOnly: true
    Error:
      type: object
      properties:
        message:
          type: string
    Unused:
      type: object
  securitySchemes:
    bearerAuth:
      type: http
      scheme: bearer
"""


CYCLIC_YAML = """
openapi: 3.1.0
info:
  title: Cyclic
  version: "1"
paths:
  /trees:
    post:
      requestBody:
        content:
          application/json:
            schema:
              $ref: "#/components/schemas/A"
      responses:
        "201":
          description: Created
  /plain:
    get:
      responses:
        "200":
          description: OK
components:
  schemas:
    A:
      type: object
      properties:
        b:
          $ref: "#/components/schemas/B"
    B:
      type: object
      properties:
        a:
          $ref: "#/components/schemas/A"
"""


DIAMOND_YAML = """
openapi: 3.0.0
info:
  title: Diamond
  version: "1"
paths: {}
components:
  schemas:
    Order:
      type: object
      properties:
        billing:
          $ref: "#/components/schemas/Address"
        shipping:
          $ref: "#/components/schemas/Address"
        lines:
          type: array
          items:
            $ref: "#/components/schemas/Line"
    Line:
      type: object
      properties:
        ship_to:
          $ref: "#/components/schemas/Address"
    Address:
      type: object
      required: [street]
      properties:
        street:
          type: string
"""


@pytest.fixture
def items_yaml() -> str:
    """The single-endpoint items API: GET /items/{id} behind an API key."""
    return ITEMS_YAML


@pytest.fixture
def petstore_yaml() -> str:
    return PETSTORE_YAML


@pytest.fixture
def items_spec(items_yaml):
    return parse_spec_from_string(items_yaml)


@pytest.fixture
def petstore_spec(petstore_yaml):
    return parse_spec_from_string(petstore_yaml)


@pytest.fixture
def cyclic_spec():
    return parse_spec_from_string(CYCLIC_YAML)


@pytest.fixture
def diamond_spec():
    return parse_spec_from_string(DIAMOND_YAML)


@pytest.fixture
def analyze():
    """Analyze ``method path`` of a spec with a fresh analyzer."""

    def _analyze(spec, path, method):
        return EndpointAnalyzer().analyze(spec.get_endpoint(path, method), spec)

    return _analyze


@pytest.fixture
def items_file(tmp_path, items_yaml) -> Path:
    path = tmp_path / "items.yaml"
    path.write_text(items_yaml)
    return path


@pytest.fixture
def petstore_file(tmp_path, petstore_yaml) -> Path:
    path = tmp_path / "petstore.yaml"
    path.write_text(petstore_yaml)
    return path


@pytest.fixture
def cyclic_file(tmp_path) -> Path:
    path = tmp_path / "cyclic.yaml"
    path.write_text(CYCLIC_YAML)
    return path
