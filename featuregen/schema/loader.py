"""YAML/JSON loading and parsing of OpenAPI documents."""

import json
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import ValidationError

from .errors import SpecLoadError, SpecValidationError
from .models import OpenAPISpecification, SpecHeader

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class SpecYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and timestamps as strings.

    ``example: 2024-05-01`` loads as ``"2024-05-01"``, the value a JSON
    client would send.
    """


SpecYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(path: str | Path) -> dict:
    """Load a YAML or JSON file and return the raw data.

    Files ending in ``.json`` are parsed as JSON; everything else as YAML.

    Args:
        path: Path to the document.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SpecLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SpecLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecLoadError(f"Cannot read file: {e}", str(path)) from e

    fmt = "json" if path.suffix.lower() == ".json" else "yaml"
    return _parse_text(text, fmt, str(path))


def parse_spec(path: str | Path) -> OpenAPISpecification:
    """Load and validate a document file.

    Raises:
        SpecLoadError: If the file cannot be read or parsed.
        SpecValidationError: If the data is not an OpenAPI 3.x document.
    """
    data = load_document(path)
    return _parse_spec_data(data, str(path))


def parse_spec_from_string(
    content: str,
    format: Literal["yaml", "json"] = "yaml",
    source: str | None = None,
) -> OpenAPISpecification:
    """Parse raw document content.

    Args:
        content: The document text.
        format: ``"yaml"`` or ``"json"``.
        source: Label recorded as the document's origin.

    Raises:
        SpecLoadError: If the content cannot be parsed.
        SpecValidationError: If the data is not an OpenAPI 3.x document.
    """
    if format not in ("yaml", "json"):
        raise SpecLoadError(f"Unsupported document format: {format!r}")
    data = _parse_text(content, format, None)
    return _parse_spec_data(data, source or f"content-{format}")


def _parse_text(text: str, fmt: str, path: str | None) -> dict:
    try:
        data = json.loads(text) if fmt == "json" else yaml.load(text, Loader=SpecYamlLoader)
    except json.JSONDecodeError as e:
        raise SpecLoadError(f"Invalid JSON: {e}", path) from e
    except yaml.YAMLError as e:
        raise SpecLoadError(f"Invalid YAML: {e}", path) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SpecLoadError(
            f"Expected a mapping at document root, got {type(data).__name__}", path
        )

    return data


def _parse_spec_data(data: dict, source: str) -> OpenAPISpecification:
    """Validate the document header and wrap the data.

    Raises:
        SpecValidationError: If the header fails validation.
    """
    try:
        SpecHeader.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SpecValidationError(
            f"Specification validation failed with {len(errors)} error(s)", errors
        ) from e

    spec = OpenAPISpecification(document=data, source=source)
    logger.info(
        "Loaded %s %s (OpenAPI %s) with %d path(s) from %s",
        spec.title,
        spec.version,
        spec.openapi_version,
        len(spec.paths),
        source,
    )
    return spec
