"""One scenario per violated constraint."""

from dataclasses import dataclass
from typing import Any

from ..analysis.models import Constraints, EndpointAnalysis
from .base import RequestField, ScenarioGenerator, collect_fields, preamble, request_step, status_step
from .data import (
    enum_mismatch,
    lower_bound,
    minimal_value,
    pattern_mismatch,
    upper_bound,
    wrong_type_value,
)
from .models import ScenarioType, TestScenario

_OMIT = object()


@dataclass(frozen=True)
class Violation:
    field: RequestField
    title: str
    value: Any = _OMIT

    @property
    def omitted(self) -> bool:
        return self.value is _OMIT


def _item(constraints: Constraints) -> Any:
    return minimal_value(constraints.items) if constraints.items else "a"


def _below(field: RequestField) -> list[Violation]:
    c = field.constraints
    found = []
    if c.type in ("integer", "number") and c.minimum is not None:
        if c.type == "integer":
            value = lower_bound(c) - 1
        else:
            value = c.minimum if c.exclusive_minimum else c.minimum - 1
        found.append(Violation(field, f'"{field.name}" below minimum {c.minimum}', value))
    if c.type == "string" and c.min_length:
        found.append(
            Violation(field, f'"{field.name}" shorter than {c.min_length} character(s)', "a" * (c.min_length - 1))
        )
    if c.type == "array" and c.min_items:
        found.append(
            Violation(field, f'"{field.name}" with fewer than {c.min_items} item(s)', [_item(c)] * (c.min_items - 1))
        )
    return found


def _above(field: RequestField) -> list[Violation]:
    c = field.constraints
    found = []
    if c.type in ("integer", "number") and c.maximum is not None:
        if c.type == "integer":
            value = upper_bound(c) + 1
        else:
            value = c.maximum if c.exclusive_maximum else c.maximum + 1
        found.append(Violation(field, f'"{field.name}" above maximum {c.maximum}', value))
    if c.type == "string" and c.max_length is not None:
        found.append(
            Violation(field, f'"{field.name}" longer than {c.max_length} character(s)', "a" * (c.max_length + 1))
        )
    if c.type == "array" and c.max_items is not None:
        found.append(
            Violation(field, f'"{field.name}" with more than {c.max_items} item(s)', [_item(c)] * (c.max_items + 1))
        )
    return found


def find_violations(field: RequestField) -> list[Violation]:
    """Constraint violations for one field, in a fixed class order."""
    c = field.constraints
    found = []

    if field.required and field.location != "path":
        found.append(Violation(field, f'Missing required field "{field.name}"'))

    if field.is_body or c.type not in (None, "string"):
        wrong = wrong_type_value(c)
        if wrong is not None:
            found.append(Violation(field, f'Invalid type for "{field.name}"', wrong))

    found.extend(_below(field))
    found.extend(_above(field))

    if c.enum:
        found.append(Violation(field, f'"{field.name}" outside allowed values', enum_mismatch(c)))

    if c.pattern and c.type in (None, "string"):
        candidate = pattern_mismatch(c.pattern)
        if candidate is not None:
            found.append(Violation(field, f'"{field.name}" not matching pattern', candidate))

    return found


class ValidationErrorGenerator(ScenarioGenerator):
    """Each scenario breaks exactly one constraint of an otherwise minimal valid request."""

    scenario_type = ScenarioType.VALIDATION_ERROR
    tags = ("@negative", "@validation")

    def violations(self, analysis: EndpointAnalysis) -> list[Violation]:
        found = []
        for field in collect_fields(analysis):
            found.extend(find_violations(field))
        return found

    def can_generate(self, analysis: EndpointAnalysis) -> bool:
        return bool(self.violations(analysis))

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        fields = collect_fields(analysis)
        status = analysis.error_status(("400", "422"), "400")
        scenarios = []

        for violation in self.violations(analysis):
            values = []
            for field in fields:
                if field == violation.field:
                    if not violation.omitted:
                        values.append((field, violation.value))
                elif field.required:
                    values.append((field, minimal_value(field.constraints)))

            steps = preamble(analysis)
            steps.append(request_step(analysis, values))
            steps.append(status_step(status))
            scenarios.append(
                self.scenario(
                    violation.title,
                    steps,
                    description=f'{analysis.identifier} rejects invalid "{violation.field.name}" ({violation.field.location})',
                )
            )
        return scenarios
