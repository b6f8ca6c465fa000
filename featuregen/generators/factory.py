"""Registry of scenario generators keyed by scenario type."""

import logging

from ..errors import GeneratorNotRegisteredError
from .all_fields import AllFieldsGenerator
from .auth_error import AuthErrorGenerator
from .base import ScenarioGenerator
from .edge_case import EdgeCaseGenerator
from .models import ScenarioType
from .not_found import NotFoundGenerator
from .required_fields import RequiredFieldsGenerator
from .validation_error import ValidationErrorGenerator

logger = logging.getLogger(__name__)

DEFAULT_GENERATORS = (
    RequiredFieldsGenerator,
    AllFieldsGenerator,
    ValidationErrorGenerator,
    AuthErrorGenerator,
    NotFoundGenerator,
    EdgeCaseGenerator,
)


class GeneratorFactory:
    """Maps each ScenarioType to one generator instance."""

    def __init__(self, generators: list[ScenarioGenerator] | None = None):
        self._generators: dict[ScenarioType, ScenarioGenerator] = {}
        for generator in generators or []:
            self.register(generator)

    def register(self, generator: ScenarioGenerator) -> None:
        """Add a generator; replaces any generator already registered for its type."""
        scenario_type = generator.get_type()
        previous = self._generators.get(scenario_type)
        if previous is not None:
            logger.debug("Replacing %r with %r", previous, generator)
        self._generators[scenario_type] = generator

    def create(self, scenario_type: ScenarioType | str) -> ScenarioGenerator:
        """Look up the generator for a type.

        Raises:
            InvalidScenarioTypeError: If a string type is not a known type.
            GeneratorNotRegisteredError: If nothing is registered for the type.
        """
        scenario_type = ScenarioType.parse(scenario_type)
        try:
            return self._generators[scenario_type]
        except KeyError:
            raise GeneratorNotRegisteredError(scenario_type.value) from None

    def is_registered(self, scenario_type: ScenarioType | str) -> bool:
        return ScenarioType.parse(scenario_type) in self._generators

    def registered_types(self) -> list[ScenarioType]:
        """Registered types in enumeration order."""
        return [t for t in ScenarioType if t in self._generators]

    def __len__(self) -> int:
        return len(self._generators)


def create_default_factory() -> GeneratorFactory:
    """A factory with the built-in generator for every scenario type."""
    return GeneratorFactory([cls() for cls in DEFAULT_GENERATORS])
