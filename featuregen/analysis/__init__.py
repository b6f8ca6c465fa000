"""Endpoint analysis for OpenAPI documents."""

from .analyzer import EndpointAnalyzer
from .endpoints import EndpointListing, EndpointSummary, list_endpoints
from .models import (
    AnalyzedParameter,
    AnalyzedRequestBody,
    AnalyzedResponse,
    Constraints,
    EndpointAnalysis,
    LinkInfo,
    RelatedEndpoint,
)

__all__ = [
    "EndpointAnalyzer",
    "EndpointListing",
    "EndpointSummary",
    "list_endpoints",
    "AnalyzedParameter",
    "AnalyzedRequestBody",
    "AnalyzedResponse",
    "Constraints",
    "EndpointAnalysis",
    "LinkInfo",
    "RelatedEndpoint",
]
