"""Unknown resource identifier in the path."""

import re

from ..analysis.models import AnalyzedParameter, EndpointAnalysis
from .base import ScenarioGenerator, collect_fields, preamble, request_step, status_step
from .data import minimal_value, nonexistent_identifier
from .models import ScenarioType, TestScenario

_CAMEL_ID = re.compile(r"[a-z0-9]Id$")
_IDENTIFIER_NAME = re.compile(r"^(id|uuid|key|slug|code)$|_id$", re.IGNORECASE)


def looks_like_identifier(name: str) -> bool:
    # camelCase suffix is case-sensitive: ``itemId`` but not ``paid``.
    return bool(_CAMEL_ID.search(name) or _IDENTIFIER_NAME.search(name))


def identifying_parameter(analysis: EndpointAnalysis) -> AnalyzedParameter | None:
    """Right-most identifier-like path parameter, else the right-most one."""
    path_params = analysis.path_parameters
    for param in reversed(path_params):
        if looks_like_identifier(param.name):
            return param
    return path_params[-1] if path_params else None


class NotFoundGenerator(ScenarioGenerator):
    scenario_type = ScenarioType.NOT_FOUND
    tags = ("@negative", "@not-found")

    def can_generate(self, analysis: EndpointAnalysis) -> bool:
        return identifying_parameter(analysis) is not None

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        target = identifying_parameter(analysis)
        if target is None:
            return []

        values = []
        for field in collect_fields(analysis):
            if field.location == "path" and field.name == target.name:
                values.append((field, nonexistent_identifier(field.constraints)))
            elif field.required:
                values.append((field, minimal_value(field.constraints)))

        steps = preamble(analysis)
        steps.append(request_step(analysis, values))
        steps.append(status_step(analysis.error_status(("404",), "404")))
        return [
            self.scenario(
                f'Resource not found for non-existent "{target.name}"',
                steps,
                description=f"{analysis.identifier} reports an unknown {target.name} as not found",
            )
        ]
