"""Data models for endpoint analysis."""

from dataclasses import dataclass, field
from typing import Any


def _merge_all_of(schema: dict[str, Any]) -> dict[str, Any]:
    """Fold ``allOf`` members into one schema.

    Properties keep declaration order (earlier members first) and
    ``required`` lists are unioned.
    """
    merged: dict[str, Any] = {k: v for k, v in schema.items() if k != "allOf"}
    properties: dict[str, Any] = {}
    required: list[str] = []
    for member in list(schema.get("allOf") or []) + [merged]:
        if not isinstance(member, dict):
            continue
        if "allOf" in member and member is not merged:
            member = _merge_all_of(member)
        for key, value in member.items():
            if key == "properties":
                properties.update(value or {})
            elif key == "required":
                required.extend(r for r in value or [] if r not in required)
            elif key not in merged:
                merged[key] = value
    if properties:
        merged["properties"] = properties
    if required:
        merged["required"] = required
    return merged


def _pick_type(schema: dict[str, Any]) -> tuple[str | None, bool]:
    declared = schema.get("type")
    nullable = schema.get("nullable") is True
    if isinstance(declared, list):
        non_null = [t for t in declared if t != "null"]
        nullable = nullable or len(non_null) < len(declared)
        declared = non_null[0] if non_null else None
    if declared is None:
        if "properties" in schema:
            declared = "object"
        elif "items" in schema:
            declared = "array"
    return declared, nullable


@dataclass(frozen=True)
class Constraints:
    """The flattened, generator-facing view of one resolved schema."""

    type: str | None = None
    format: str | None = None
    nullable: bool = False
    required: tuple[str, ...] = ()
    properties: dict[str, "Constraints"] = field(default_factory=dict)
    items: "Constraints | None" = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    multiple_of: int | float | None = None
    min_items: int | None = None
    max_items: int | None = None
    enum: tuple[Any, ...] | None = None
    default: Any = None
    example: Any = None
    read_only: bool = False
    write_only: bool = False

    @classmethod
    def from_schema(cls, schema: dict[str, Any] | None) -> "Constraints":
        """Build constraints from a schema that holds no references."""
        if not isinstance(schema, dict):
            return cls()
        if "allOf" in schema:
            schema = _merge_all_of(schema)
        for combinator in ("oneOf", "anyOf"):
            options = schema.get(combinator)
            if options and isinstance(options[0], dict) and "type" not in schema:
                base = {k: v for k, v in schema.items() if k != combinator}
                schema = {**options[0], **base}
                break

        schema_type, nullable = _pick_type(schema)
        minimum = schema.get("minimum")
        maximum = schema.get("maximum")
        exclusive_min = schema.get("exclusiveMinimum", False)
        exclusive_max = schema.get("exclusiveMaximum", False)
        # OpenAPI 3.1 carries the bound itself in exclusiveMinimum/Maximum.
        if not isinstance(exclusive_min, bool):
            minimum, exclusive_min = exclusive_min, True
        if not isinstance(exclusive_max, bool):
            maximum, exclusive_max = exclusive_max, True

        properties = {
            name: cls.from_schema(prop)
            for name, prop in (schema.get("properties") or {}).items()
        }
        items = schema.get("items")
        enum = schema.get("enum")
        if enum is None and "const" in schema:
            enum = [schema["const"]]

        return cls(
            type=schema_type,
            format=schema.get("format"),
            nullable=nullable,
            required=tuple(schema.get("required") or ()),
            properties=properties,
            items=cls.from_schema(items) if isinstance(items, dict) else None,
            min_length=schema.get("minLength"),
            max_length=schema.get("maxLength"),
            pattern=schema.get("pattern"),
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=bool(exclusive_min),
            exclusive_maximum=bool(exclusive_max),
            multiple_of=schema.get("multipleOf"),
            min_items=schema.get("minItems"),
            max_items=schema.get("maxItems"),
            enum=tuple(enum) if enum else None,
            default=schema.get("default"),
            example=schema.get("example"),
            read_only=schema.get("readOnly") is True,
            write_only=schema.get("writeOnly") is True,
        )

    @property
    def has_bounds(self) -> bool:
        return any(
            v is not None
            for v in (
                self.minimum,
                self.maximum,
                self.min_length,
                self.max_length,
                self.min_items,
                self.max_items,
            )
        )

    @property
    def has_constraints(self) -> bool:
        """Whether anything beyond a plain string type is declared."""
        return (
            self.has_bounds
            or self.enum is not None
            or self.pattern is not None
            or self.type not in (None, "string")
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if name == "properties":
                if value:
                    data[name] = {k: v.to_dict() for k, v in value.items()}
            elif name == "items":
                if value is not None:
                    data[name] = value.to_dict()
            elif value is None or value is False or value == ():
                continue
            else:
                data[name] = list(value) if isinstance(value, tuple) else value
        return data


@dataclass(frozen=True)
class AnalyzedParameter:
    """A resolved operation parameter."""

    name: str
    location: str  # path / query / header / cookie
    required: bool
    constraints: Constraints
    schema: dict[str, Any] = field(default_factory=dict)
    description: str | None = None
    example: Any = None
    examples: tuple[Any, ...] = ()

    @property
    def declared_example(self) -> Any:
        """The parameter-level example, else the first named example."""
        if self.example is not None:
            return self.example
        return self.examples[0] if self.examples else None


@dataclass(frozen=True)
class AnalyzedRequestBody:
    """A resolved request body."""

    required: bool
    content_type: str
    schema: dict[str, Any]
    constraints: Constraints
    examples: tuple[Any, ...] = ()

    @property
    def example(self) -> Any:
        return self.examples[0] if self.examples else None


@dataclass(frozen=True)
class AnalyzedResponse:
    """A resolved response for one status key."""

    status_code: str
    description: str
    content_type: str | None = None
    schema: dict[str, Any] | None = None
    constraints: Constraints | None = None

    @property
    def status_class(self) -> str:
        """``2xx``, ``4xx`` etc., or ``default``."""
        if self.status_code == "default":
            return "default"
        return f"{self.status_code[0]}xx"


@dataclass(frozen=True)
class LinkInfo:
    """A link declared on one of the endpoint's responses.

    Non-string parameter expressions are kept as their JSON text.
    """

    name: str
    status_code: str
    operation_id: str | None = None
    operation_ref: str | None = None
    description: str | None = None
    parameters: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status_code": self.status_code,
            "operation_id": self.operation_id,
            "operation_ref": self.operation_ref,
            "description": self.description,
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class RelatedEndpoint:
    """Another operation reachable from this one."""

    relationship: str  # link / callback / webhook
    path: str
    method: str
    via: str

    @property
    def identifier(self) -> str:
        return f"{self.method} {self.path}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "relationship": self.relationship,
            "path": self.path,
            "method": self.method,
            "via": self.via,
        }


@dataclass(frozen=True)
class EndpointAnalysis:
    """The resolved, flattened view of one endpoint.

    Every scenario generator reads from this and nothing else.
    """

    path: str
    method: str
    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    deprecated: bool = False
    parameters: tuple[AnalyzedParameter, ...] = ()
    request_body: AnalyzedRequestBody | None = None
    responses: dict[str, AnalyzedResponse] = field(default_factory=dict)
    security: tuple[dict[str, tuple[str, ...]], ...] = ()
    security_schemes: dict[str, dict[str, Any]] = field(default_factory=dict)
    links: tuple[LinkInfo, ...] = ()
    related_endpoints: tuple[RelatedEndpoint, ...] = ()

    @property
    def identifier(self) -> str:
        return f"{self.method} {self.path}"

    @property
    def required_parameters(self) -> list[AnalyzedParameter]:
        return [p for p in self.parameters if p.required]

    @property
    def optional_parameters(self) -> list[AnalyzedParameter]:
        return [p for p in self.parameters if not p.required]

    @property
    def path_parameters(self) -> list[AnalyzedParameter]:
        return [p for p in self.parameters if p.location == "path"]

    @property
    def security_scheme_names(self) -> list[str]:
        """Scheme names in order of first appearance."""
        names: list[str] = []
        for requirement in self.security:
            for name in requirement:
                if name not in names:
                    names.append(name)
        return names

    @property
    def requires_auth(self) -> bool:
        """At least one scheme applies and no requirement alternative is empty."""
        if not self.security:
            return False
        return all(requirement for requirement in self.security)

    @property
    def primary_security(self) -> list[str]:
        """Schemes of the first non-empty requirement alternative."""
        for requirement in self.security:
            if requirement:
                return list(requirement)
        return []

    @property
    def success_response(self) -> AnalyzedResponse | None:
        for response in self.responses.values():
            if response.status_class == "2xx":
                return response
        return None

    @property
    def success_status(self) -> str:
        """The declared success status, or the conventional one."""
        for code in self.responses:
            if code.isdigit() and code.startswith("2"):
                return code
        if "2XX" in self.responses or "2xx" in self.responses:
            return "200"
        return "201" if self.method == "POST" else "200"

    @property
    def error_responses(self) -> list[AnalyzedResponse]:
        return [r for r in self.responses.values() if r.status_class == "4xx"]

    def error_status(self, candidates: tuple[str, ...], fallback: str) -> str:
        """First declared status among candidates, else the fallback."""
        for code in candidates:
            if code in self.responses:
                return code
        return fallback

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "operation_id": self.operation_id,
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags),
            "deprecated": self.deprecated,
            "parameters": [
                {
                    "name": p.name,
                    "in": p.location,
                    "required": p.required,
                    "constraints": p.constraints.to_dict(),
                    **({"examples": list(p.examples)} if p.examples else {}),
                }
                for p in self.parameters
            ],
            "request_body": (
                {
                    "required": self.request_body.required,
                    "content_type": self.request_body.content_type,
                    "constraints": self.request_body.constraints.to_dict(),
                    **(
                        {"examples": list(self.request_body.examples)}
                        if self.request_body.examples
                        else {}
                    ),
                }
                if self.request_body
                else None
            ),
            "responses": {
                code: {
                    "description": r.description,
                    "content_type": r.content_type,
                    "constraints": r.constraints.to_dict() if r.constraints else None,
                }
                for code, r in self.responses.items()
            },
            "security": [
                {name: list(scopes) for name, scopes in req.items()} for req in self.security
            ],
            "security_schemes": self.security_schemes,
            "links": [link.to_dict() for link in self.links],
            "related_endpoints": [related.to_dict() for related in self.related_endpoints],
        }
