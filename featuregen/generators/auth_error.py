"""Missing and invalid credentials, one outline per security scheme."""

from typing import Any

from ..analysis.models import EndpointAnalysis
from .base import (
    ScenarioGenerator,
    api_available,
    authenticated_with,
    collect_fields,
    request_step,
    status_step,
    step,
)
from .data import minimal_value
from .models import ExamplesTable, ScenarioType, StepKeyword, TestScenario

CREDENTIAL_VARIANTS = ("missing", "invalid")


def describe_carrier(name: str, scheme: dict[str, Any]) -> str:
    """Human-readable description of where a scheme's credentials travel."""
    kind = scheme.get("type")
    if kind == "apiKey":
        return f'API key in {scheme.get("in", "header")} "{scheme.get("name", name)}"'
    if kind == "http":
        http_scheme = str(scheme.get("scheme", "")).lower()
        if http_scheme == "bearer":
            return "bearer token"
        if http_scheme == "basic":
            return "basic credentials"
        return f"{http_scheme or 'HTTP'} credentials"
    if kind == "oauth2":
        return "OAuth2 access token"
    if kind == "openIdConnect":
        return "OpenID Connect access token"
    return f'credentials for "{name}"'


class AuthErrorGenerator(ScenarioGenerator):
    """Skips entirely unless every requirement alternative names a scheme."""

    scenario_type = ScenarioType.AUTH_ERROR
    tags = ("@negative", "@auth")

    def can_generate(self, analysis: EndpointAnalysis) -> bool:
        return analysis.requires_auth

    def generate(self, analysis: EndpointAnalysis) -> list[TestScenario]:
        if not analysis.requires_auth:
            return []

        values = [(f, minimal_value(f.constraints)) for f in collect_fields(analysis) if f.required]
        status = analysis.error_status(("401", "403"), "401")
        scenarios = []

        for name in analysis.security_scheme_names:
            carrier = describe_carrier(name, analysis.security_schemes.get(name, {}))
            steps = [api_available()]
            steps.extend(authenticated_with(other) for other in analysis.primary_security if other != name)
            steps.append(step(StepKeyword.AND, f"the {carrier} is <credentials>"))
            steps.append(request_step(analysis, values))
            steps.append(status_step(status))
            scenarios.append(
                self.scenario(
                    f'Request with <credentials> credentials for "{name}"',
                    steps,
                    description=f'{analysis.identifier} refuses requests without valid "{name}" credentials',
                    examples=ExamplesTable(
                        headers=("credentials",),
                        rows=tuple((variant,) for variant in CREDENTIAL_VARIANTS),
                    ),
                )
            )
        return scenarios
