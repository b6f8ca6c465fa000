"""Render FeatureFile objects as Gherkin, JSON or Markdown text.

Every renderer is a pure function of the FeatureFile: no timestamps, no
dependence on dict ordering beyond declaration order, and exactly one
trailing newline, so serializing twice yields identical text.
"""

import json
from enum import Enum
from typing import Any

from ..errors import UnsupportedFormatError
from ..generators.models import DataTable, Step, TestScenario
from .models import FeatureFile

INDENT = "  "


class OutputFormat(str, Enum):
    GHERKIN = "gherkin"
    JSON = "json"
    MARKDOWN = "markdown"

    @classmethod
    def parse(cls, value: Any) -> "OutputFormat":
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise UnsupportedFormatError(value, [m.value for m in cls])

    @property
    def extension(self) -> str:
        return {"gherkin": "feature", "json": "json", "markdown": "md"}[self.value]

    def __str__(self) -> str:
        return self.value


def _escape_cell(value: str) -> str:
    return value.replace("\\", "\\\\").replace("|", "\\|").replace("\n", "\\n")


def render_table(table: DataTable, indent: str) -> list[str]:
    """Table lines with columns padded to a common width."""
    rows = [tuple(_escape_cell(c) for c in table.headers)]
    rows.extend(tuple(_escape_cell(c) for c in row) for row in table.rows)
    widths = [max(len(row[i]) for row in rows) for i in range(len(table.headers))]
    return [
        indent + "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) + " |"
        for row in rows
    ]


def _render_steps(steps: tuple[Step, ...], indent: str) -> list[str]:
    lines = []
    for step in steps:
        lines.append(f"{indent}{step.keyword.value} {step.text}")
        if step.data_table is not None:
            lines.extend(render_table(step.data_table, indent + INDENT))
        if step.doc_string is not None:
            lines.append(f'{indent}{INDENT}"""')
            lines.extend(f"{indent}{INDENT}{line}" for line in step.doc_string.splitlines())
            lines.append(f'{indent}{INDENT}"""')
    return lines


def _render_scenario(scenario: TestScenario) -> list[str]:
    lines = []
    if scenario.tags:
        lines.append(INDENT + " ".join(scenario.tags))
    lines.append(f"{INDENT}{scenario.keyword}: {scenario.name}")
    if scenario.description:
        lines.extend(f"{INDENT * 2}{line}" for line in scenario.description.splitlines())
        lines.append("")
    if scenario.data_table is not None:
        lines.extend(
            f"{INDENT * 2}# {line.strip()}" for line in render_table(scenario.data_table, "")
        )
    lines.extend(_render_steps(scenario.steps, INDENT * 2))
    if scenario.examples is not None:
        lines.append("")
        lines.append(f"{INDENT * 2}Examples:")
        lines.extend(render_table(scenario.examples, INDENT * 3))
    return lines


def to_gherkin(feature: FeatureFile) -> str:
    lines = [f"# {key}: {value}" for key, value in feature.metadata.items()]
    if lines:
        lines.append("")
    if feature.info.tags:
        lines.append(" ".join(feature.info.tags))
    lines.append(f"Feature: {feature.info.name}")
    if feature.info.description:
        lines.extend(f"{INDENT}{line}" for line in feature.info.description.splitlines())

    if feature.background is not None:
        lines.append("")
        title = f" {feature.background.name}" if feature.background.name else ""
        lines.append(f"{INDENT}Background:{title}")
        lines.extend(_render_steps(feature.background.steps, INDENT * 2))

    for scenario in feature.scenarios:
        lines.append("")
        lines.extend(_render_scenario(scenario))

    return "\n".join(lines) + "\n"


def to_json(feature: FeatureFile) -> str:
    data = feature.to_dict()
    data["stats"] = {
        "scenario_count": feature.scenario_count,
        "total_step_count": feature.total_step_count,
        "scenarios_by_type": feature.scenarios_by_type(),
    }
    return json.dumps(data, indent=2) + "\n"


def _md_cell(value: str) -> str:
    return value.replace("|", "\\|")


def to_markdown(feature: FeatureFile) -> str:
    lines = [f"# {feature.info.name}", ""]
    if feature.info.description:
        lines.extend([feature.info.description, ""])
    if feature.info.tags:
        lines.extend(["Tags: " + " ".join(f"`{t}`" for t in feature.info.tags), ""])
    metadata = feature.metadata.items()
    if metadata:
        lines.extend(f"- **{key}**: {value}" for key, value in metadata)
        lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.append("| # | Scenario | Type | Steps | Tags |")
    lines.append("|---|----------|------|-------|------|")
    for number, scenario in enumerate(feature.scenarios, start=1):
        tags = " ".join(f"`{t}`" for t in scenario.tags)
        lines.append(
            f"| {number} | {_md_cell(scenario.name)} | {scenario.scenario_type.value} "
            f"| {scenario.step_count} | {tags} |"
        )
    lines.append("")
    lines.append(
        f"Total: {feature.scenario_count} scenario(s), {feature.total_step_count} step(s)"
    )

    if feature.background is not None:
        lines.extend(["", "## Background", ""])
        lines.extend(f"- {s.keyword.value} {s.text}" for s in feature.background.steps)

    if feature.scenarios:
        lines.extend(["", "## Scenarios"])
    for number, scenario in enumerate(feature.scenarios, start=1):
        lines.extend(["", f"### {number}. {scenario.name}", ""])
        if scenario.description:
            lines.extend([scenario.description, ""])
        lines.extend(f"- {s.keyword.value} {s.text}" for s in scenario.steps)
        if scenario.examples is not None:
            lines.extend(["", "Examples: " + ", ".join(row[0] for row in scenario.examples.rows)])

    return "\n".join(lines) + "\n"


_RENDERERS = {
    OutputFormat.GHERKIN: to_gherkin,
    OutputFormat.JSON: to_json,
    OutputFormat.MARKDOWN: to_markdown,
}


class FeatureSerializer:
    """Dispatches a FeatureFile to the renderer for a format."""

    def supported_formats(self) -> list[str]:
        return [f.value for f in OutputFormat]

    def serialize(self, feature: FeatureFile, format: OutputFormat | str = OutputFormat.GHERKIN) -> str:
        """Render a feature.

        Raises:
            UnsupportedFormatError: If the format is not supported.
        """
        return _RENDERERS[OutputFormat.parse(format)](feature)
