"""Endpoint analysis: resolve an operation into an EndpointAnalysis."""

import json
import logging
from typing import Any

from ..resolver.ref_resolver import ReferenceResolver, is_reference, split_pointer
from ..schema.models import HTTP_METHODS, Endpoint, OpenAPISpecification
from .models import (
    AnalyzedParameter,
    AnalyzedRequestBody,
    AnalyzedResponse,
    Constraints,
    EndpointAnalysis,
    LinkInfo,
    RelatedEndpoint,
)

logger = logging.getLogger(__name__)

PREFERRED_MEDIA_TYPES = ("application/json", "multipart/form-data")


def _pick_media_type(content: dict[str, Any] | None) -> tuple[str | None, dict[str, Any]]:
    """Prefer JSON, then multipart, then whatever is declared first."""
    if not content:
        return None, {}
    for media_type in PREFERRED_MEDIA_TYPES:
        if media_type in content:
            return media_type, content[media_type] or {}
    media_type = next(iter(content))
    return media_type, content[media_type] or {}


class EndpointAnalyzer:
    """Produce fully resolved EndpointAnalysis objects.

    Resolution errors (missing pointers, cycles) propagate to the caller:
    an endpoint whose schemas cannot be resolved cannot be analyzed.
    """

    def __init__(self, resolver: ReferenceResolver | None = None):
        self.resolver = resolver or ReferenceResolver()
        self._document_id: int | None = None

    def analyze(self, endpoint: Endpoint, spec: OpenAPISpecification) -> EndpointAnalysis:
        """Analyze one endpoint of a document.

        Raises:
            ReferenceNotFoundError: If a required pointer does not exist.
            CircularReferenceError: If a required schema is cyclic.
        """
        self._bind(spec)

        parameters = tuple(self._analyze_parameter(p, spec) for p in endpoint.parameters)
        request_body = (
            self._analyze_request_body(endpoint.request_body, spec)
            if endpoint.request_body
            else None
        )
        responses = {
            str(code): self._analyze_response(str(code), response, spec)
            for code, response in endpoint.responses.items()
        }
        security = endpoint.security
        if security is None:
            security = spec.default_security
        requirements = tuple(
            {name: tuple(scopes or ()) for name, scopes in (req or {}).items()}
            for req in security
        )
        schemes = self._security_schemes(requirements, spec)
        links, related = self._relationships(endpoint, spec)

        analysis = EndpointAnalysis(
            path=endpoint.path,
            method=endpoint.method,
            operation_id=endpoint.operation_id,
            summary=endpoint.summary,
            description=endpoint.description,
            tags=tuple(endpoint.tags),
            deprecated=endpoint.deprecated,
            parameters=parameters,
            request_body=request_body,
            responses=responses,
            security=requirements,
            security_schemes=schemes,
            links=links,
            related_endpoints=related,
        )
        logger.info(
            "Analyzed %s: %d parameter(s), body=%s, %d response(s), auth=%s",
            analysis.identifier,
            len(parameters),
            "yes" if request_body else "no",
            len(responses),
            ", ".join(analysis.security_scheme_names) or "none",
        )
        return analysis

    def _bind(self, spec: OpenAPISpecification) -> None:
        """Drop cached resolutions that belong to a different document."""
        document_id = id(spec.document)
        if self._document_id is not None and self._document_id != document_id:
            logger.debug("Document changed, clearing reference cache")
            self.resolver.clear_cache()
        self._document_id = document_id

    def _resolve(self, node: Any, spec: OpenAPISpecification) -> Any:
        if is_reference(node):
            return self.resolver.resolve(node["$ref"], spec)
        return node

    def _analyze_parameter(self, param: Any, spec: OpenAPISpecification) -> AnalyzedParameter:
        resolved = self._resolve(param, spec)
        location = resolved.get("in", "query")

        schema = resolved.get("schema")
        examples = self._examples(resolved, spec)
        if resolved.get("content"):
            _, media = _pick_media_type(resolved["content"])
            examples += self._examples(media, spec)
            if schema is None:
                schema = media.get("schema")
        if schema is None:
            schema = {"type": "string"}
        schema = self.resolver.resolve_schema(schema, spec)

        return AnalyzedParameter(
            name=resolved.get("name", ""),
            location=location,
            required=bool(resolved.get("required", location == "path")),
            constraints=Constraints.from_schema(schema),
            schema=schema,
            description=resolved.get("description"),
            example=resolved.get("example", schema.get("example")),
            examples=examples,
        )

    def _analyze_request_body(self, body: Any, spec: OpenAPISpecification) -> AnalyzedRequestBody:
        resolved = self._resolve(body, spec)
        content_type, media = _pick_media_type(resolved.get("content"))
        schema = media.get("schema")
        schema = self.resolver.resolve_schema(schema, spec) if schema is not None else {"type": "object"}

        return AnalyzedRequestBody(
            required=resolved.get("required") is True,
            content_type=content_type or "application/json",
            schema=schema,
            constraints=Constraints.from_schema(schema),
            examples=self._examples(media, spec),
        )

    def _analyze_response(self, code: str, response: Any, spec: OpenAPISpecification) -> AnalyzedResponse:
        resolved = self._resolve(response, spec) or {}
        content_type, media = _pick_media_type(resolved.get("content"))
        schema = media.get("schema")
        if schema is not None:
            schema = self.resolver.resolve_schema(schema, spec)

        return AnalyzedResponse(
            status_code=code,
            description=resolved.get("description", ""),
            content_type=content_type,
            schema=schema,
            constraints=Constraints.from_schema(schema) if schema is not None else None,
        )

    def _security_schemes(
        self, requirements: tuple[dict[str, tuple[str, ...]], ...], spec: OpenAPISpecification
    ) -> dict[str, dict[str, Any]]:
        declared = spec.security_schemes
        schemes: dict[str, dict[str, Any]] = {}
        for requirement in requirements:
            for name in requirement:
                if name in schemes:
                    continue
                scheme = declared.get(name)
                schemes[name] = self._resolve(scheme, spec) if scheme else {}
        return schemes

    def _examples(self, holder: dict[str, Any], spec: OpenAPISpecification) -> tuple[Any, ...]:
        """Values of ``example`` and of every named entry in ``examples``."""
        values: list[Any] = []
        if "example" in holder:
            values.append(holder["example"])
        named = holder.get("examples")
        if isinstance(named, dict):
            for example in named.values():
                example = self._resolve(example, spec)
                if isinstance(example, dict) and "value" in example:
                    values.append(example["value"])
        return tuple(values)

    def find_related_endpoints(
        self, endpoint: Endpoint, spec: OpenAPISpecification
    ) -> list[RelatedEndpoint]:
        """Operations reached through this endpoint's response links and callbacks.

        Link targets come first, in response then link order, followed by
        one entry per method of every callback expression. Links whose
        target cannot be found are skipped.
        """
        self._bind(spec)
        _, related = self._relationships(endpoint, spec)
        return list(related)

    def _relationships(
        self, endpoint: Endpoint, spec: OpenAPISpecification
    ) -> tuple[tuple[LinkInfo, ...], tuple[RelatedEndpoint, ...]]:
        links: list[LinkInfo] = []
        related: list[RelatedEndpoint] = []

        for code, response in endpoint.responses.items():
            resolved = self._resolve(response, spec) or {}
            for name, link in (resolved.get("links") or {}).items():
                link = self._resolve(link, spec)
                if not isinstance(link, dict):
                    continue
                links.append(
                    LinkInfo(
                        name=name,
                        status_code=str(code),
                        operation_id=link.get("operationId"),
                        operation_ref=link.get("operationRef"),
                        description=link.get("description"),
                        parameters={
                            key: value if isinstance(value, str) else json.dumps(value)
                            for key, value in (link.get("parameters") or {}).items()
                        },
                    )
                )
                target = self._link_target(link, spec)
                if target is None:
                    logger.debug("Link %s in %s response has no matching operation", name, code)
                    continue
                relationship, path, method = target
                related.append(
                    RelatedEndpoint(relationship, path, method, f"{name} link in {code} response")
                )

        for callback_name, callback in (endpoint.operation.get("callbacks") or {}).items():
            callback = self._resolve(callback, spec) or {}
            for expression, path_item in callback.items():
                path_item = self._resolve(path_item, spec)
                if not isinstance(path_item, dict):
                    continue
                for method in HTTP_METHODS:
                    if method in path_item:
                        related.append(
                            RelatedEndpoint(
                                "callback", expression, method.upper(), f"{callback_name} callback"
                            )
                        )

        return tuple(links), tuple(related)

    def _link_target(
        self, link: dict[str, Any], spec: OpenAPISpecification
    ) -> tuple[str, str, str] | None:
        """``(relationship, path, METHOD)`` of the operation a link points at."""
        operation_id = link.get("operationId")
        if operation_id:
            found = self._find_operation(operation_id, spec)
            if found is not None:
                return found

        operation_ref = link.get("operationRef")
        if isinstance(operation_ref, str) and "#/" in operation_ref:
            segments = split_pointer(operation_ref[operation_ref.index("#/") :])
            if len(segments) >= 3 and segments[0] in ("paths", "webhooks"):
                relationship = "webhook" if segments[0] == "webhooks" else "link"
                return relationship, segments[1], segments[2].upper()
        return None

    def _find_operation(
        self, operation_id: str, spec: OpenAPISpecification
    ) -> tuple[str, str, str] | None:
        """Search paths, then webhooks, for an operationId."""
        sections = (("link", spec.paths), ("webhook", spec.document.get("webhooks") or {}))
        for relationship, items in sections:
            for path, path_item in items.items():
                path_item = self._resolve(path_item, spec)
                if not isinstance(path_item, dict):
                    continue
                for method in HTTP_METHODS:
                    operation = path_item.get(method)
                    if isinstance(operation, dict) and operation.get("operationId") == operation_id:
                        return relationship, path, method.upper()
        return None
