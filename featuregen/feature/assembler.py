"""Group generated scenarios into a FeatureFile."""

import logging
from dataclasses import replace
from typing import Any

from ..generators.models import Step, StepKeyword, TestScenario
from .models import Background, FeatureFile, FeatureInfo, FeatureMetadata

logger = logging.getLogger(__name__)

DEFAULT_FEATURE_TAGS = ("@api", "@generated")


def common_leading_steps(scenarios: list[TestScenario]) -> list[Step]:
    """Longest run of structurally equal steps that starts every scenario."""
    if not scenarios:
        return []
    shared: list[Step] = []
    for candidates in zip(*(s.steps for s in scenarios)):
        first = candidates[0]
        if any(c != first for c in candidates[1:]):
            break
        shared.append(first)
    return shared


def _strip_leading(scenario: TestScenario, count: int) -> TestScenario:
    remaining = list(scenario.steps[count:])
    if remaining and remaining[0].keyword in (StepKeyword.AND, StepKeyword.BUT):
        remaining[0] = replace(remaining[0], keyword=StepKeyword.GIVEN)
    return scenario.with_steps(tuple(remaining))


class FeatureAssembler:
    """Build one FeatureFile per endpoint.

    A Background is extracted when at least two scenarios share a leading
    run of at least ``background_min_steps`` equal steps (keyword, text and
    tables all compared) and every scenario keeps at least one step.
    """

    def __init__(
        self,
        background_min_steps: int = 1,
        feature_tags: tuple[str, ...] = DEFAULT_FEATURE_TAGS,
    ):
        if background_min_steps < 1:
            raise ValueError("background_min_steps must be at least 1")
        self.background_min_steps = background_min_steps
        self.feature_tags = tuple(feature_tags)

    def assemble(
        self,
        scenarios: list[TestScenario],
        endpoint: str,
        method: str,
        metadata: dict[str, Any] | None = None,
    ) -> FeatureFile:
        """Assemble scenarios for ``method endpoint``.

        Args:
            scenarios: Generated scenarios, kept in order.
            endpoint: The endpoint path.
            method: The HTTP method.
            metadata: Optional ``spec_name``, ``spec_version``,
                ``openapi_version``, ``operation_id``, ``summary`` and
                ``description`` entries.
        """
        metadata = metadata or {}
        method = method.upper()
        scenarios = list(scenarios)

        background = None
        shared = common_leading_steps(scenarios)
        shortest = min((s.step_count for s in scenarios), default=0)
        # Every scenario must keep a step of its own.
        shared = shared[: max(shortest - 1, 0)]
        if len(scenarios) >= 2 and len(shared) >= self.background_min_steps:
            background = Background(steps=tuple(shared))
            scenarios = [_strip_leading(s, len(shared)) for s in scenarios]
            logger.debug("Extracted %d background step(s) for %s %s", len(shared), method, endpoint)

        description = metadata.get("summary") or metadata.get("description")
        return FeatureFile(
            info=FeatureInfo(
                name=f"{method} {endpoint}",
                description=description,
                tags=self.feature_tags,
            ),
            scenarios=tuple(scenarios),
            metadata=FeatureMetadata(
                spec_name=metadata.get("spec_name"),
                spec_version=metadata.get("spec_version"),
                openapi_version=metadata.get("openapi_version"),
                endpoint=endpoint,
                method=method,
                operation_id=metadata.get("operation_id"),
            ),
            background=background,
        )
