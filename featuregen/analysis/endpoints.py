"""Listing and filtering the endpoints of a document."""

from dataclasses import dataclass, field
from typing import Any

from ..schema.models import OpenAPISpecification

UNTAGGED = "default"


@dataclass(frozen=True)
class EndpointSummary:
    """One row of an endpoint listing."""

    path: str
    method: str
    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    deprecated: bool = False

    @property
    def identifier(self) -> str:
        return f"{self.method} {self.path}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "operation_id": self.operation_id,
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags),
            "deprecated": self.deprecated,
        }


@dataclass
class EndpointListing:
    """Filtered endpoints, plus the same endpoints grouped by tag."""

    endpoints: list[EndpointSummary] = field(default_factory=list)
    grouped_by_tag: dict[str, list[EndpointSummary]] = field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return len(self.endpoints)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_count": self.total_count,
            "endpoints": [e.to_dict() for e in self.endpoints],
            "grouped_by_tag": {
                tag: [e.identifier for e in entries] for tag, entries in self.grouped_by_tag.items()
            },
        }


def list_endpoints(
    spec: OpenAPISpecification,
    method: str | None = None,
    tag: str | None = None,
    path: str | None = None,
) -> EndpointListing:
    """List endpoints in declaration order.

    Args:
        spec: The loaded document.
        method: Keep only this HTTP method (case-insensitive).
        tag: Keep only endpoints carrying this tag.
        path: Keep only endpoints whose path contains this substring.

    Returns:
        EndpointListing; untagged endpoints are grouped under ``"default"``.
    """
    listing = EndpointListing()

    for endpoint in spec.endpoints():
        if method and endpoint.method != method.upper():
            continue
        if tag and tag not in endpoint.tags:
            continue
        if path and path not in endpoint.path:
            continue

        summary = EndpointSummary(
            path=endpoint.path,
            method=endpoint.method,
            operation_id=endpoint.operation_id,
            summary=endpoint.summary,
            description=endpoint.description,
            tags=tuple(endpoint.tags),
            deprecated=endpoint.deprecated,
        )
        listing.endpoints.append(summary)
        for group in summary.tags or (UNTAGGED,):
            listing.grouped_by_tag.setdefault(group, []).append(summary)

    return listing
