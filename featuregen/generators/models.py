"""Data models for scenario generation."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ..errors import InvalidScenarioTypeError


class ScenarioType(str, Enum):
    """Type of generated scenario."""

    REQUIRED_FIELDS = "required_fields"  # Only required inputs, minimal values
    ALL_FIELDS = "all_fields"  # Every declared input
    VALIDATION_ERROR = "validation_error"  # One violated constraint per scenario
    AUTH_ERROR = "auth_error"  # Missing/invalid credentials per scheme
    NOT_FOUND = "not_found"  # Unknown resource identifier
    EDGE_CASE = "edge_case"  # Boundary values

    @classmethod
    def parse(cls, value: Any) -> "ScenarioType":
        """Parse an exact scenario type name.

        No case folding or whitespace stripping: ``"Auth_Error"`` and
        ``" auth_error"`` are rejected.

        Raises:
            InvalidScenarioTypeError: If the value is not a known type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidScenarioTypeError(value, [m.value for m in cls])

    @property
    def display_name(self) -> str:
        return " ".join(word.capitalize() for word in self.value.split("_"))

    def __str__(self) -> str:
        return self.value


class StepKeyword(str, Enum):
    """Gherkin step keywords."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DataTable:
    """A table of string cells attached to a step or scenario."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self):
        for row in self.rows:
            if len(row) != len(self.headers):
                raise ValueError(
                    f"Table row {row!r} has {len(row)} cell(s), expected {len(self.headers)}"
                )

    def to_dict(self) -> dict[str, Any]:
        return {"headers": list(self.headers), "rows": [list(r) for r in self.rows]}


@dataclass(frozen=True)
class ExamplesTable(DataTable):
    """Example rows substituted into a Scenario Outline."""


@dataclass(frozen=True)
class Step:
    """One Gherkin step."""

    keyword: StepKeyword
    text: str
    data_table: DataTable | None = None
    doc_string: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"keyword": self.keyword.value, "text": self.text}
        if self.data_table is not None:
            data["data_table"] = self.data_table.to_dict()
        if self.doc_string is not None:
            data["doc_string"] = self.doc_string
        return data


@dataclass(frozen=True)
class TestScenario:
    """A single generated scenario."""

    __test__ = False  # not a pytest test class

    name: str
    scenario_type: ScenarioType
    steps: tuple[Step, ...]
    tags: tuple[str, ...] = ()
    description: str | None = None
    data_table: DataTable | None = None
    examples: ExamplesTable | None = None

    @property
    def is_outline(self) -> bool:
        return self.examples is not None

    @property
    def keyword(self) -> str:
        return "Scenario Outline" if self.is_outline else "Scenario"

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def example_count(self) -> int:
        return len(self.examples.rows) if self.examples else 0

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def with_tag(self, tag: str) -> "TestScenario":
        """Return a copy carrying one more tag."""
        if self.has_tag(tag):
            return self
        return replace(self, tags=self.tags + (tag,))

    def with_steps(self, steps: tuple[Step, ...]) -> "TestScenario":
        return replace(self, steps=tuple(steps))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.scenario_type.value,
            "keyword": self.keyword,
            "tags": list(self.tags),
            "steps": [s.to_dict() for s in self.steps],
            "step_count": self.step_count,
            "example_count": self.example_count,
        }
        if self.description:
            data["description"] = self.description
        if self.data_table is not None:
            data["data_table"] = self.data_table.to_dict()
        if self.examples is not None:
            data["examples"] = self.examples.to_dict()
        return data


@dataclass
class GenerationResult:
    """Result of running generators over one endpoint analysis."""

    scenarios: list[TestScenario] = field(default_factory=list)
    generated_counts: dict[str, int] = field(default_factory=dict)
    skipped_types: list[str] = field(default_factory=list)

    @property
    def total_scenarios(self) -> int:
        return len(self.scenarios)

    def by_type(self, scenario_type: ScenarioType | str) -> list[TestScenario]:
        value = scenario_type.value if isinstance(scenario_type, ScenarioType) else scenario_type
        return [s for s in self.scenarios if s.scenario_type.value == value]
