"""Happy path with every declared input."""

from ..analysis.models import EndpointAnalysis
from .base import (
    ScenarioGenerator,
    collect_fields,
    preamble,
    request_step,
    step,
    success_steps,
)
from .data import format_value, representative_value
from .models import ScenarioType, StepKeyword, TestScenario


class AllFieldsGenerator(ScenarioGenerator):
    """Exactly one scenario sending every field with a representative value.

    A declared example for a field wins over the generated value.

    Optional body fields that the success response also declares are
    asserted to be echoed back.
    """

    scenario_type = ScenarioType.ALL_FIELDS
    tags = ("@positive", "@all-fields")

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        values = [
            (f, f.example if f.example is not None else representative_value(f.constraints, f.name))
            for f in collect_fields(analysis)
        ]
        steps = preamble(analysis)
        steps.append(request_step(analysis, values))
        steps.extend(success_steps(analysis))

        response = analysis.responses.get(analysis.success_status)
        echoed = response.constraints.properties if response and response.constraints else {}
        for field, value in values:
            if field.is_body and not field.required and field.name in echoed:
                steps.append(
                    step(
                        StepKeyword.AND,
                        f'the response field "{field.name}" should be {format_value(value)}',
                    )
                )

        return [
            self.scenario(
                "Successful request with all fields",
                steps,
                description=f"{analysis.identifier} accepts a request carrying every declared input",
            )
        ]
