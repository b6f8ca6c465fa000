"""Scenario generation from endpoint analyses."""

from .all_fields import AllFieldsGenerator
from .auth_error import AuthErrorGenerator
from .base import RequestField, ScenarioGenerator, collect_fields
from .edge_case import EdgeCaseGenerator
from .factory import GeneratorFactory, create_default_factory
from .generator import generate_scenarios
from .models import (
    DataTable,
    ExamplesTable,
    GenerationResult,
    ScenarioType,
    Step,
    StepKeyword,
    TestScenario,
)
from .not_found import NotFoundGenerator
from .required_fields import RequiredFieldsGenerator
from .validation_error import ValidationErrorGenerator

__all__ = [
    "AllFieldsGenerator",
    "AuthErrorGenerator",
    "EdgeCaseGenerator",
    "NotFoundGenerator",
    "RequiredFieldsGenerator",
    "ValidationErrorGenerator",
    "RequestField",
    "ScenarioGenerator",
    "collect_fields",
    "GeneratorFactory",
    "create_default_factory",
    "generate_scenarios",
    "DataTable",
    "ExamplesTable",
    "GenerationResult",
    "ScenarioType",
    "Step",
    "StepKeyword",
    "TestScenario",
]
