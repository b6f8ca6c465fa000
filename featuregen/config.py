"""Settings loaded from an optional YAML file."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError, InvalidScenarioTypeError
from .feature.assembler import DEFAULT_FEATURE_TAGS
from .feature.serializer import OutputFormat
from .generators.models import ScenarioType

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Defaults for generation and export; CLI options override them."""

    model_config = ConfigDict(extra="forbid")

    scenario_types: list[ScenarioType] = Field(default_factory=lambda: list(ScenarioType))
    output_format: OutputFormat = OutputFormat.GHERKIN
    background_min_steps: int = Field(default=1, ge=1)
    feature_tags: list[str] = Field(default_factory=lambda: list(DEFAULT_FEATURE_TAGS))
    log_level: str = "WARNING"

    @field_validator("scenario_types", mode="before")
    @classmethod
    def parse_scenario_types(cls, value):
        if isinstance(value, list):
            try:
                return [ScenarioType.parse(v) for v in value]
            except InvalidScenarioTypeError as e:
                raise ValueError(e.message) from e
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file, or defaults when no path is given.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid.
    """
    if path is None:
        return Settings()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}", path=str(path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", path=str(path))

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(x) for x in err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise ConfigError(
            f"Config validation failed with {len(errors)} error(s)",
            path=str(path),
            errors=errors,
        ) from e
