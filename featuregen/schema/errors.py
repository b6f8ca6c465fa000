"""Document loading exceptions."""

from ..errors import ErrorKind, FeatureGenError


class SpecLoadError(FeatureGenError):
    """Raised when a specification file cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(ErrorKind.SPEC_LOAD, message, path=path)
        self.path = path


class SpecValidationError(FeatureGenError):
    """Raised when a document is not a usable OpenAPI 3.x specification."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(ErrorKind.SPEC_VALIDATION, message, errors=errors or [])
        self.errors = errors or []
