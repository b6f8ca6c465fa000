"""SpecSession: the operations exposed to callers over one loaded document."""

import logging
from pathlib import Path
from typing import Callable, Iterable, Literal

from .analysis.analyzer import EndpointAnalyzer
from .analysis.endpoints import EndpointListing, list_endpoints
from .analysis.models import EndpointAnalysis
from .config import Settings
from .feature.assembler import FeatureAssembler
from .feature.models import FeatureFile
from .feature.serializer import FeatureSerializer, OutputFormat
from .generators.factory import GeneratorFactory, create_default_factory
from .generators.generator import generate_scenarios
from .generators.models import GenerationResult, ScenarioType, TestScenario
from .resolver.ref_resolver import ReferenceResolver
from .schema.errors import SpecLoadError
from .schema.loader import parse_spec, parse_spec_from_string
from .schema.models import OpenAPISpecification

logger = logging.getLogger(__name__)


class SpecSession:
    """Holds one loaded document plus the resolver cache scoped to it.

    Single-writer: one session serves one document at a time. Loading
    another document clears the resolver cache first.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        resolver: ReferenceResolver | None = None,
        factory: GeneratorFactory | None = None,
    ):
        self.settings = settings or Settings()
        self.resolver = resolver or ReferenceResolver()
        self.factory = factory or create_default_factory()
        self.analyzer = EndpointAnalyzer(self.resolver)
        self.assembler = FeatureAssembler(
            background_min_steps=self.settings.background_min_steps,
            feature_tags=tuple(self.settings.feature_tags),
        )
        self.serializer = FeatureSerializer()
        self._spec: OpenAPISpecification | None = None

    @property
    def spec(self) -> OpenAPISpecification:
        if self._spec is None:
            raise SpecLoadError("No specification loaded")
        return self._spec

    @property
    def is_loaded(self) -> bool:
        return self._spec is not None

    def _use(self, spec: OpenAPISpecification) -> OpenAPISpecification:
        self.resolver.clear_cache()
        self._spec = spec
        return spec

    def load(self, path: str | Path) -> OpenAPISpecification:
        """Load a document file (YAML, or JSON by ``.json`` suffix)."""
        return self._use(parse_spec(path))

    def load_string(
        self, content: str, format: Literal["yaml", "json"] = "yaml"
    ) -> OpenAPISpecification:
        return self._use(parse_spec_from_string(content, format))

    def list_endpoints(
        self, method: str | None = None, tag: str | None = None, path: str | None = None
    ) -> EndpointListing:
        return list_endpoints(self.spec, method=method, tag=tag, path=path)

    def analyze_endpoint(self, path: str, method: str) -> EndpointAnalysis:
        """Analyze one endpoint.

        Raises:
            EndpointNotFoundError: If the endpoint is not declared.
            ReferenceNotFoundError: If a needed pointer does not resolve.
            CircularReferenceError: If a needed schema is cyclic.
        """
        endpoint = self.spec.get_endpoint(path, method)
        return self.analyzer.analyze(endpoint, self.spec)

    def generate_scenarios(
        self,
        path: str,
        method: str,
        scenario_types: Iterable[ScenarioType | str] | None = None,
    ) -> GenerationResult:
        """Generate scenarios; ``scenario_types`` defaults to the configured types."""
        analysis = self.analyze_endpoint(path, method)
        if scenario_types is None:
            scenario_types = self.settings.scenario_types
        return generate_scenarios(analysis, scenario_types, self.factory)

    def build_feature(
        self, scenarios: list[TestScenario], path: str, method: str
    ) -> FeatureFile:
        spec = self.spec
        endpoint = spec.get_endpoint(path, method)
        metadata = {
            "spec_name": spec.title,
            "spec_version": spec.version,
            "openapi_version": spec.openapi_version,
            "operation_id": endpoint.operation_id,
            "summary": endpoint.summary,
            "description": endpoint.description,
        }
        return self.assembler.assemble(scenarios, endpoint.path, endpoint.method, metadata)

    def export_feature(
        self,
        scenarios: list[TestScenario],
        path: str,
        method: str,
        format: OutputFormat | str | None = None,
    ) -> str:
        """Assemble and render scenarios for one endpoint.

        Raises:
            UnsupportedFormatError: If the format is not supported.
        """
        output_format = OutputFormat.parse(format if format is not None else self.settings.output_format)
        feature = self.build_feature(scenarios, path, method)
        return self.serializer.serialize(feature, output_format)

    def export_all(
        self,
        format: OutputFormat | str | None = None,
        scenario_types: Iterable[ScenarioType | str] | None = None,
        should_continue: Callable[[], bool] | None = None,
    ) -> dict[str, str]:
        """Render every endpoint, keyed by ``"<METHOD> <path>"``.

        ``should_continue`` is consulted only before starting each endpoint;
        an endpoint already being processed always completes.
        """
        output_format = OutputFormat.parse(format if format is not None else self.settings.output_format)
        types = list(scenario_types) if scenario_types is not None else None
        rendered: dict[str, str] = {}

        for endpoint in self.spec.endpoints():
            if should_continue is not None and not should_continue():
                logger.info("Export stopped after %d endpoint(s)", len(rendered))
                break
            result = self.generate_scenarios(endpoint.path, endpoint.method, types)
            rendered[endpoint.identifier] = self.export_feature(
                result.scenarios, endpoint.path, endpoint.method, output_format
            )
        return rendered
