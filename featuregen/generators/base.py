"""Shared building blocks for scenario generators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..analysis.models import Constraints, EndpointAnalysis
from .data import format_value
from .models import DataTable, ScenarioType, Step, StepKeyword, TestScenario

BODY = "body"
REQUEST_TABLE_HEADERS = ("field", "in", "value")


@dataclass(frozen=True)
class RequestField:
    """One top-level input of a request: a parameter or a body property."""

    name: str
    location: str
    required: bool
    constraints: Constraints
    example: Any = field(default=None, compare=False)

    @property
    def is_body(self) -> bool:
        return self.location == BODY


def collect_fields(analysis: EndpointAnalysis) -> list[RequestField]:
    """Parameters in declaration order, then top-level body properties.

    A body without declared properties becomes a single field named ``body``.
    Read-only body properties are never sent. Declared examples (the
    parameter's own, or the matching member of the body example) ride
    along on each field.
    """
    fields = [
        RequestField(p.name, p.location, p.required, p.constraints, p.declared_example)
        for p in analysis.parameters
    ]

    body = analysis.request_body
    if body is None:
        return fields

    constraints = body.constraints
    example = body.example
    if constraints.type == "object" and constraints.properties:
        for name, prop in constraints.properties.items():
            if prop.read_only:
                continue
            fields.append(
                RequestField(
                    name,
                    BODY,
                    body.required and name in constraints.required,
                    prop,
                    example.get(name) if isinstance(example, dict) else None,
                )
            )
    else:
        fields.append(RequestField(BODY, BODY, body.required, constraints, example))
    return fields


def step(keyword: StepKeyword, text: str, data_table: DataTable | None = None) -> Step:
    return Step(keyword=keyword, text=text, data_table=data_table)


def api_available() -> Step:
    return step(StepKeyword.GIVEN, "the API is available")


def authenticated_with(scheme: str) -> Step:
    return step(StepKeyword.AND, f'I am authenticated with "{scheme}"')


def preamble(analysis: EndpointAnalysis, skip_schemes: Iterable[str] = ()) -> list[Step]:
    """Opening steps: availability, then credentials for the primary requirement."""
    steps = [api_available()]
    if analysis.requires_auth:
        skipped = set(skip_schemes)
        steps.extend(
            authenticated_with(scheme)
            for scheme in analysis.primary_security
            if scheme not in skipped
        )
    return steps


def request_step(analysis: EndpointAnalysis, values: list[tuple[RequestField, Any]]) -> Step:
    """The When step, with a ``field | in | value`` table when anything is sent."""
    text = f'I send a {analysis.method} request to "{analysis.path}"'
    if not values:
        return step(StepKeyword.WHEN, text)
    table = DataTable(
        headers=REQUEST_TABLE_HEADERS,
        rows=tuple((f.name, f.location, format_value(v)) for f, v in values),
    )
    return step(StepKeyword.WHEN, f"{text} with:", table)


def status_step(code: str) -> Step:
    return step(StepKeyword.THEN, f"the response status should be {code}")


def not_server_error_step() -> Step:
    return step(StepKeyword.THEN, "the response should not be a server error")


def success_steps(analysis: EndpointAnalysis) -> list[Step]:
    """Success status, plus a schema check when the success response has a body."""
    code = analysis.success_status
    steps = [status_step(code)]
    response = analysis.responses.get(code)
    if response is not None and response.schema is not None:
        steps.append(step(StepKeyword.AND, f'the response body should match the "{code}" response schema'))
    return steps


class ScenarioGenerator(ABC):
    """Derives scenarios of one fixed type from an EndpointAnalysis.

    Generators never touch the resolver; they read the already resolved
    analysis only, so any instance may be shared and called in any order.
    """

    scenario_type: ScenarioType
    tags: tuple[str, ...] = ()

    def get_type(self) -> ScenarioType:
        return self.scenario_type

    def can_generate(self, analysis: EndpointAnalysis) -> bool:
        return True

    @abstractmethod
    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        """Build scenarios; returns an empty list when nothing applies."""

    def scenario(
        self,
        name: str,
        steps: list[Step],
        description: str | None = None,
        **kwargs: Any,
    ) -> TestScenario:
        return TestScenario(
            name=name,
            scenario_type=self.scenario_type,
            steps=tuple(steps),
            tags=self.tags,
            description=description,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.scenario_type.value})"
