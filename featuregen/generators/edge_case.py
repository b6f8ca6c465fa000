"""Boundary values and the empty-versus-absent distinction."""

from dataclasses import dataclass
from typing import Any

from ..analysis.models import Constraints, EndpointAnalysis
from .base import (
    RequestField,
    ScenarioGenerator,
    collect_fields,
    not_server_error_step,
    preamble,
    request_step,
    status_step,
)
from .data import empty_value, lower_bound, minimal_value, upper_bound
from .models import ScenarioType, TestScenario

_ABSENT = object()


@dataclass(frozen=True)
class Boundary:
    field: RequestField
    title: str
    value: Any = _ABSENT
    expect_success: bool = True

    @property
    def absent(self) -> bool:
        return self.value is _ABSENT


def _item(constraints: Constraints) -> Any:
    return minimal_value(constraints.items) if constraints.items else "a"


def find_boundaries(field: RequestField) -> list[Boundary]:
    """Boundary values for one field, in a fixed order."""
    c = field.constraints
    name = field.name
    found = []

    if c.type in ("integer", "number"):
        if c.minimum is not None:
            found.append(Boundary(field, f'"{name}" at minimum {lower_bound(c)}', lower_bound(c)))
        if c.maximum is not None:
            found.append(Boundary(field, f'"{name}" at maximum {upper_bound(c)}', upper_bound(c)))
    if c.type == "string" and not c.enum and not c.format:
        if c.min_length is not None:
            found.append(
                Boundary(field, f'"{name}" at minimum length {c.min_length}', "a" * c.min_length)
            )
        if c.max_length is not None:
            found.append(
                Boundary(field, f'"{name}" at maximum length {c.max_length}', "a" * c.max_length)
            )
    if c.type == "array":
        if c.min_items is not None:
            found.append(
                Boundary(field, f'"{name}" with minimum {c.min_items} item(s)', [_item(c)] * c.min_items)
            )
        if c.max_items is not None:
            found.append(
                Boundary(field, f'"{name}" with maximum {c.max_items} item(s)', [_item(c)] * c.max_items)
            )

    if not field.required and c.type in ("string", "array", "object"):
        found.append(Boundary(field, f'Empty "{name}"', empty_value(c), expect_success=False))
        found.append(Boundary(field, f'Absent "{name}"'))

    return found


class EdgeCaseGenerator(ScenarioGenerator):
    """Exact bounds are valid input; nothing here goes beyond a bound."""

    scenario_type = ScenarioType.EDGE_CASE
    tags = ("@edge-case",)

    def boundaries(self, analysis: EndpointAnalysis) -> list[Boundary]:
        found = []
        for field in collect_fields(analysis):
            found.extend(find_boundaries(field))
        return found

    def can_generate(self, analysis: EndpointAnalysis) -> bool:
        return bool(self.boundaries(analysis))

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        fields = collect_fields(analysis)
        scenarios = []

        for boundary in self.boundaries(analysis):
            values = []
            for field in fields:
                if field == boundary.field:
                    if not boundary.absent:
                        values.append((field, boundary.value))
                elif field.required:
                    values.append((field, minimal_value(field.constraints)))

            steps = preamble(analysis)
            steps.append(request_step(analysis, values))
            if boundary.expect_success:
                steps.append(status_step(analysis.success_status))
            else:
                steps.append(not_server_error_step())
            scenarios.append(self.scenario(boundary.title, steps))
        return scenarios
