"""Data models for assembled feature files."""

from dataclasses import dataclass, field
from typing import Any

from ..generators.models import Step, TestScenario


@dataclass(frozen=True)
class FeatureInfo:
    name: str
    description: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class FeatureMetadata:
    """Where a feature came from. Holds no timestamps."""

    spec_name: str | None = None
    spec_version: str | None = None
    openapi_version: str | None = None
    endpoint: str | None = None
    method: str | None = None
    operation_id: str | None = None

    def items(self) -> list[tuple[str, str]]:
        """Non-empty fields in declaration order."""
        return [
            (name, str(getattr(self, name)))
            for name in self.__dataclass_fields__
            if getattr(self, name) not in (None, "")
        ]

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(frozen=True)
class Background:
    """Steps shared by the start of every scenario."""

    steps: tuple[Step, ...]
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "steps": [s.to_dict() for s in self.steps]}


@dataclass(frozen=True)
class FeatureFile:
    """All scenarios for one endpoint."""

    info: FeatureInfo
    scenarios: tuple[TestScenario, ...] = ()
    metadata: FeatureMetadata = field(default_factory=FeatureMetadata)
    background: Background | None = None

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def scenario_count(self) -> int:
        return len(self.scenarios)

    @property
    def total_step_count(self) -> int:
        background = len(self.background.steps) if self.background else 0
        return background + sum(s.step_count for s in self.scenarios)

    def scenarios_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for scenario in self.scenarios:
            key = scenario.scenario_type.value
            counts[key] = counts.get(key, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "feature": {
                "name": self.info.name,
                "description": self.info.description,
                "tags": list(self.info.tags),
            },
            "metadata": self.metadata.to_dict(),
            "background": self.background.to_dict() if self.background else None,
            "scenarios": [s.to_dict() for s in self.scenarios],
        }
