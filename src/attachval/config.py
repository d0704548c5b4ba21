"""Configuration management for attachval using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

CONFIG_FILENAME = ".attachval.json"


class OutputFormat(str, Enum):
    """Report output formats."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @property
    def logging_level(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class AttributeConfig(BaseModel):
    """Validators configured for one attachment attribute.

    ``dimension`` holds raw dimension options, with ranges written as
    two-item lists: ``{"width": {"in": [10, 20]}, "min": [100, 100]}``. A
    value of ``{"attribute": "maxWidth"}`` is read from each record.
    """
    dimension: dict[str, Any] | None = None
    content_type: list[str] | str | None = Field(alias="contentType", default=None)
    message: str | None = None

    @model_validator(mode="after")
    def validate_has_validator(self):
        if self.dimension is None and self.content_type is None:
            raise ValueError("attribute needs at least one of 'dimension' or 'contentType'")
        return self

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class AttachvalConfig(BaseModel):
    """Complete attachval configuration model."""
    attributes: dict[str, AttributeConfig] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("attributes")
    @classmethod
    def validate_attribute_names(cls, v):
        for name in v:
            if not name.strip():
                raise ValueError("attribute names must not be empty")
        return v

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> AttachvalConfig:
    """Load the attribute validators to run from a ``.attachval.json`` file.

    Without a path, the nearest ``.attachval.json`` upwards from the current
    directory is used; with none found, nothing is validated.

    Raises:
        ValueError: If the file is not JSON or does not match the schema
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.exists():
        return create_default_config()

    try:
        with open(path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")

    try:
        return AttachvalConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest ``.attachval.json`` in ``start_dir`` or one of its parents."""
    current = Path(start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def create_default_config() -> AttachvalConfig:
    """Create an empty configuration; no attribute is validated."""
    return AttachvalConfig()
