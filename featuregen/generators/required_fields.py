"""Happy path with only the required inputs."""

from ..analysis.models import EndpointAnalysis
from .base import ScenarioGenerator, collect_fields, preamble, request_step, success_steps
from .data import minimal_value
from .models import ScenarioType, TestScenario


class RequiredFieldsGenerator(ScenarioGenerator):
    """Exactly one scenario sending required fields with minimal valid values."""

    scenario_type = ScenarioType.REQUIRED_FIELDS
    tags = ("@positive", "@required-fields")

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        values = [(f, minimal_value(f.constraints)) for f in collect_fields(analysis) if f.required]
        steps = preamble(analysis)
        steps.append(request_step(analysis, values))
        steps.extend(success_steps(analysis))
        return [
            self.scenario(
                "Successful request with required fields only",
                steps,
                description=f"{analysis.identifier} accepts a request carrying only its required inputs",
            )
        ]
