"""Pydantic models for loaded OpenAPI documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import EndpointNotFoundError

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")


class Info(BaseModel):
    """The ``info`` block of a document."""

    title: str
    version: str
    description: str | None = None

    @field_validator("title", "version", mode="before")
    @classmethod
    def scalar_to_str(cls, value: Any) -> Any:
        """Unquoted YAML scalars such as ``version: 1.0`` become strings."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SpecHeader(BaseModel):
    """Structural minimum a document must satisfy before it is analyzed."""

    model_config = ConfigDict(extra="allow")

    openapi: str
    info: Info
    paths: dict[str, Any]

    @field_validator("openapi", mode="before")
    @classmethod
    def check_version(cls, value: Any) -> str:
        """Only OpenAPI 3.0.x and 3.1.x are supported."""
        value = str(value)
        if not (value.startswith("3.0") or value.startswith("3.1")):
            raise ValueError(
                f"Unsupported OpenAPI version {value}; only 3.0.x and 3.1.x are supported"
            )
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def default_paths(cls, value: Any) -> Any:
        """An explicit ``paths: null`` is treated as no paths."""
        return {} if value is None else value


class Endpoint(BaseModel):
    """One (path, method) operation, as a view over the document."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: str
    operation: dict[str, Any] = Field(default_factory=dict)
    path_parameters: list[Any] = Field(default_factory=list)

    @field_validator("path")
    @classmethod
    def check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {value!r}")
        return value

    @field_validator("method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        """Upper-case the method and reject anything that is not an HTTP verb."""
        if value.lower() not in HTTP_METHODS:
            raise ValueError(f"Invalid HTTP method: {value!r}")
        return value.upper()

    @property
    def identifier(self) -> str:
        return f"{self.method} {self.path}"

    @property
    def operation_id(self) -> str | None:
        return self.operation.get("operationId")

    @property
    def summary(self) -> str | None:
        return self.operation.get("summary")

    @property
    def description(self) -> str | None:
        return self.operation.get("description")

    @property
    def tags(self) -> list[str]:
        return list(self.operation.get("tags") or [])

    @property
    def deprecated(self) -> bool:
        return self.operation.get("deprecated") is True

    @property
    def parameters(self) -> list[Any]:
        """Path-item parameters merged with operation parameters.

        Operation parameters override path-item parameters with the same
        ``(name, in)``. Parameters given as ``$ref`` cannot be keyed before
        resolution and are always kept.
        """
        merged: list[Any] = []
        positions: dict[tuple[str, str], int] = {}
        for param in list(self.path_parameters) + list(self.operation.get("parameters") or []):
            if not isinstance(param, dict):
                continue
            if "$ref" in param:
                merged.append(param)
                continue
            key = (param.get("name", ""), param.get("in", "query"))
            if key in positions:
                merged[positions[key]] = param
            else:
                positions[key] = len(merged)
                merged.append(param)
        return merged

    @property
    def request_body(self) -> dict[str, Any] | None:
        return self.operation.get("requestBody")

    @property
    def responses(self) -> dict[str, Any]:
        return dict(self.operation.get("responses") or {})

    @property
    def security(self) -> list[dict[str, Any]] | None:
        """The operation's own security requirements, or None if not overridden."""
        if "security" not in self.operation:
            return None
        return list(self.operation.get("security") or [])


class OpenAPISpecification(BaseModel):
    """A loaded document plus where it came from.

    The document is read-only for the lifetime of an analysis; nothing in
    featuregen mutates it.
    """

    model_config = ConfigDict(frozen=True)

    document: dict[str, Any]
    source: str = "<memory>"

    @property
    def info(self) -> dict[str, Any]:
        return self.document.get("info") or {}

    @property
    def title(self) -> str:
        return str(self.info.get("title", ""))

    @property
    def version(self) -> str:
        return str(self.info.get("version", ""))

    @property
    def openapi_version(self) -> str:
        return str(self.document.get("openapi", ""))

    @property
    def paths(self) -> dict[str, Any]:
        return self.document.get("paths") or {}

    @property
    def security_schemes(self) -> dict[str, Any]:
        components = self.document.get("components") or {}
        return dict(components.get("securitySchemes") or {})

    @property
    def default_security(self) -> list[dict[str, Any]]:
        return list(self.document.get("security") or [])

    def endpoints(self) -> list[Endpoint]:
        """All operations in declaration order."""
        result = []
        for path, path_item in self.paths.items():
            if not isinstance(path_item, dict):
                continue
            for method, operation in path_item.items():
                if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                    continue
                result.append(
                    Endpoint(
                        path=path,
                        method=method,
                        operation=operation,
                        path_parameters=list(path_item.get("parameters") or []),
                    )
                )
        return result

    def get_endpoint(self, path: str, method: str) -> Endpoint:
        """Look up one operation.

        Raises:
            EndpointNotFoundError: If the document has no such operation.
        """
        path_item = self.paths.get(path)
        if isinstance(path_item, dict):
            for key, operation in path_item.items():
                if key.lower() == method.lower() and key.lower() in HTTP_METHODS:
                    return Endpoint(
                        path=path,
                        method=key,
                        operation=operation or {},
                        path_parameters=list(path_item.get("parameters") or []),
                    )
        raise EndpointNotFoundError(path, method)
