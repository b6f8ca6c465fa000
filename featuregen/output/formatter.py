"""Output formatting for CLI results."""

import json
from typing import Literal

from ..analysis.endpoints import EndpointListing
from ..analysis.models import EndpointAnalysis
from ..errors import FeatureGenError
from ..generators.models import GenerationResult
from ..validators.base import Severity, ValidationIssue, ValidationResult

Format = Literal["text", "json"]


def format_validation_result(result: ValidationResult, format: Format = "text") -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        data = {
            "valid": result.is_valid,
            "error_count": len(result.errors),
            "warning_count": len(result.warnings),
            "issues": [
                {
                    "code": issue.code,
                    "message": issue.message,
                    "severity": issue.severity.value,
                    "location": issue.location,
                    "details": issue.details,
                }
                for issue in result.issues
            ],
        }
        return json.dumps(data, indent=2)

    lines: list[str] = []
    for title, issues in (("ERRORS:", result.errors), ("WARNINGS:", result.warnings)):
        lines.append(title)
        if issues:
            lines.extend(f"  {_format_issue_text(issue)}" for issue in issues)
        else:
            lines.append("  (none)")
        lines.append("")

    if result.is_valid:
        if result.warnings:
            lines.append(f"Validation passed with {len(result.warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    location = f"[{issue.location}] " if issue.location else ""
    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"
    return f"{symbol} {issue.code}: {location}{issue.message}"


def format_endpoint_listing(listing: EndpointListing, format: Format = "text") -> str:
    if format == "json":
        return json.dumps(listing.to_dict(), indent=2)

    lines: list[str] = []
    for tag, endpoints in listing.grouped_by_tag.items():
        lines.append(f"{tag}:")
        for endpoint in endpoints:
            line = f"  {endpoint.method:<7} {endpoint.path}"
            if endpoint.summary:
                line += f"  - {endpoint.summary}"
            if endpoint.deprecated:
                line += "  (deprecated)"
            lines.append(line)
        lines.append("")
    lines.append(f"{listing.total_count} endpoint(s)")
    return "\n".join(lines)


def format_analysis(analysis: EndpointAnalysis, format: Format = "text") -> str:
    if format == "json":
        return json.dumps(analysis.to_dict(), indent=2)

    lines = [analysis.identifier]
    if analysis.operation_id:
        lines.append(f"  operationId: {analysis.operation_id}")
    if analysis.summary:
        lines.append(f"  summary: {analysis.summary}")

    lines.append("  parameters:")
    if analysis.parameters:
        for param in analysis.parameters:
            flag = "required" if param.required else "optional"
            kind = param.constraints.type or "any"
            lines.append(f"    - {param.name} ({param.location}, {kind}, {flag})")
    else:
        lines.append("    (none)")

    body = analysis.request_body
    if body is not None:
        flag = "required" if body.required else "optional"
        lines.append(f"  request body: {body.content_type} ({flag})")
        for name, prop in body.constraints.properties.items():
            marker = "*" if name in body.constraints.required else " "
            lines.append(f"    {marker} {name}: {prop.type or 'any'}")

    lines.append("  responses:")
    for code, response in analysis.responses.items():
        lines.append(f"    {code}: {response.description}")

    auth = ", ".join(analysis.security_scheme_names) if analysis.requires_auth else "none"
    lines.append(f"  auth: {auth}")

    if analysis.links:
        lines.append("  links:")
        for link in analysis.links:
            target = link.operation_id or link.operation_ref or "(no target)"
            lines.append(f"    - {link.name} ({link.status_code}) -> {target}")
    if analysis.related_endpoints:
        lines.append("  related endpoints:")
        for related in analysis.related_endpoints:
            lines.append(f"    - {related.relationship}: {related.identifier} ({related.via})")
    return "\n".join(lines)


def format_generation_result(
    result: GenerationResult, identifier: str, format: Format = "text"
) -> str:
    if format == "json":
        data = {
            "endpoint": identifier,
            "total_scenarios": result.total_scenarios,
            "generated_counts": result.generated_counts,
            "skipped_types": result.skipped_types,
            "scenarios": [
                {
                    "name": s.name,
                    "type": s.scenario_type.value,
                    "tags": list(s.tags),
                    "step_count": s.step_count,
                    "example_count": s.example_count,
                }
                for s in result.scenarios
            ],
        }
        return json.dumps(data, indent=2)

    lines = [f"{identifier}: {result.total_scenarios} scenario(s)"]
    for scenario in result.scenarios:
        lines.append(f"  [{scenario.scenario_type.value}] {scenario.name}")
    if result.skipped_types:
        lines.append(f"Skipped: {', '.join(result.skipped_types)}")
    return "\n".join(lines)


def format_error(error: FeatureGenError) -> str:
    """Error line plus one indented line per diagnostic field."""
    lines = [f"Error [{error.kind.value}]: {error.message}"]
    for key, value in error.details.items():
        if value in (None, [], {}):
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) if not isinstance(v, dict) else json.dumps(v) for v in value)
        lines.append(f"  {key}: {value}")
    return "\n".join(lines)
