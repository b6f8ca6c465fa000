"""Scenario generation orchestrator."""

import logging
from typing import Iterable

from ..analysis.models import EndpointAnalysis
from .factory import GeneratorFactory, create_default_factory
from .models import GenerationResult, ScenarioType

logger = logging.getLogger(__name__)


def generate_scenarios(
    analysis: EndpointAnalysis,
    scenario_types: Iterable[ScenarioType | str] | None = None,
    factory: GeneratorFactory | None = None,
) -> GenerationResult:
    """Run the requested generators over one analysis.

    Types whose generator reports ``can_generate() == False`` are skipped
    and listed in ``skipped_types``; that is not an error.

    Args:
        analysis: The endpoint to generate for.
        scenario_types: Types to run, in order. Defaults to every
            registered type.
        factory: Generator registry. Defaults to the built-in generators.

    Returns:
        GenerationResult with scenarios in type order, then generator order.

    Raises:
        InvalidScenarioTypeError: If a requested string is not a known type.
        GeneratorNotRegisteredError: If a requested type has no generator.
    """
    factory = factory or create_default_factory()
    if scenario_types is None:
        types = factory.registered_types()
    else:
        types = [ScenarioType.parse(t) for t in scenario_types]

    result = GenerationResult()
    for scenario_type in types:
        generator = factory.create(scenario_type)
        if not generator.can_generate(analysis):
            logger.debug("Skipping %s for %s", scenario_type.value, analysis.identifier)
            result.skipped_types.append(scenario_type.value)
            continue

        scenarios = generator.generate(analysis)
        result.scenarios.extend(scenarios)
        result.generated_counts[scenario_type.value] = (
            result.generated_counts.get(scenario_type.value, 0) + len(scenarios)
        )

    logger.info(
        "Generated %d scenario(s) for %s", result.total_scenarios, analysis.identifier
    )
    return result
